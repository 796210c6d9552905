"""
Tests for the offer catalog: categories, addons, packages and the public calculator view.
"""

import unittest

from helpers import PNG_BYTES, ApiTestCase


class OfferCatalogTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def _post(self, path, body, expected=201):
        response = self.client.post(f"/api/admin/{path}", json=body, headers=self.admin)
        self.assertEqual(response.status_code, expected, response.text)
        return response.json()

    def test_category_names_are_unique(self):
        self._post("categories", {"name": "Film"})
        response = self.client.post(
            "/api/admin/categories", json={"name": "Film"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 409)

    def test_addon_keeps_category_links(self):
        film = self._post("categories", {"name": "Film"})
        foto = self._post("categories", {"name": "Foto"})
        addon = self._post("addons", {"name": "Dron", "price": 800, "category_ids": [film["id"]]})
        self.assertEqual(addon["category_ids"], [film["id"]])

        response = self.client.patch(
            f"/api/admin/addons/{addon['id']}",
            json={"category_ids": [foto["id"]], "price": 900},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["category_ids"], [foto["id"]])
        self.assertEqual(response.json()["price"], 900)

    def test_addon_with_unknown_category_is_400(self):
        response = self.client.post(
            "/api/admin/addons",
            json={"name": "Dron", "price": 800, "category_ids": [999]},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 400)

    def test_package_with_addons_and_public_view(self):
        film = self._post("categories", {"name": "Film"})
        dron = self._post("addons", {"name": "Dron", "price": 800})
        teaser = self._post("addons", {"name": "Teaser", "price": 400})
        published = self._post(
            "packages",
            {
                "name": "Złoty",
                "price": 6000,
                "category_id": film["id"],
                "is_published": True,
                "addons": [{"id": dron["id"], "is_locked": True}],
            },
        )
        self._post("packages", {"name": "Szkic", "price": 100})

        self.assertEqual(published["category_name"], "Film")
        self.assertEqual(published["addons"], [{"id": dron["id"], "is_locked": True}])

        offer = self.client.get("/api/packages").json()
        self.assertEqual([p["name"] for p in offer["packages"]], ["Złoty"])
        included = offer["packages"][0]["included"]
        self.assertEqual([a["id"] for a in included], [dron["id"]])
        self.assertTrue(included[0]["locked"])
        self.assertEqual({a["id"] for a in offer["allAddons"]}, {dron["id"], teaser["id"]})
        self.assertEqual([c["name"] for c in offer["categories"]], ["Film"])

        admin_view = self.client.get("/api/admin/offer-data", headers=self.admin).json()
        self.assertEqual(len(admin_view["packages"]), 2)

    def test_unlocked_addon_stays_unlocked_in_public_view(self):
        dron = self._post("addons", {"name": "Dron", "price": 800})
        teaser = self._post("addons", {"name": "Teaser", "price": 400})
        self._post(
            "packages",
            {
                "name": "Srebrny",
                "price": 4000,
                "is_published": True,
                "addons": [
                    {"id": dron["id"], "is_locked": False},
                    {"id": teaser["id"], "is_locked": True},
                ],
            },
        )

        included = self.client.get("/api/packages").json()["packages"][0]["included"]
        locked = {addon["id"]: addon["locked"] for addon in included}
        self.assertEqual(locked, {dron["id"]: False, teaser["id"]: True})

    def test_package_addons_are_replaced_on_update(self):
        dron = self._post("addons", {"name": "Dron", "price": 800})
        teaser = self._post("addons", {"name": "Teaser", "price": 400})
        package = self._post(
            "packages", {"name": "Srebrny", "price": 4000, "addons": [{"id": dron["id"]}]}
        )

        response = self.client.patch(
            f"/api/admin/packages/{package['id']}",
            json={"addons": [{"id": teaser["id"], "is_locked": False}]},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["addons"], [{"id": teaser["id"], "is_locked": False}])

    def test_deleting_category_detaches_packages(self):
        film = self._post("categories", {"name": "Film"})
        self._post("addons", {"name": "Dron", "price": 800, "category_ids": [film["id"]]})
        package = self._post("packages", {"name": "Złoty", "price": 6000, "category_id": film["id"]})

        response = self.client.delete(f"/api/admin/categories/{film['id']}", headers=self.admin)
        self.assertEqual(response.status_code, 204)

        packages = self.client.get("/api/admin/packages", headers=self.admin).json()
        self.assertEqual(packages[0]["id"], package["id"])
        self.assertIsNone(packages[0]["category_id"])
        addons = self.client.get("/api/admin/addons", headers=self.admin).json()
        self.assertEqual(addons[0]["category_ids"], [])

    def test_missing_rows_are_404(self):
        for path in ("categories/77", "addons/77", "packages/77"):
            response = self.client.delete(f"/api/admin/{path}", headers=self.admin)
            self.assertEqual(response.status_code, 404, path)

    def test_package_image_upload(self):
        response = self.client.post(
            "/api/admin/packages/upload-image",
            files={"file": ("pakiet.png", PNG_BYTES, "image/png")},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertIn("/packages/", response.json()["url"])


if __name__ == "__main__":
    unittest.main()
