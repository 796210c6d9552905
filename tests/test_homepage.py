"""
Tests for the homepage editor (slides, About section, testimonials, Instagram)
and the public homepage content.
"""

import unittest

from dreamcatcher.models import HomepageInstagramPost, HomepageSlide
from helpers import PNG_BYTES, ApiTestCase


class HomepageTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.admin_headers()

    def _post(self, path, body):
        response = self.client.post(f"/api/admin/homepage/{path}", json=body, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def _upload(self, path, name="kadr.png"):
        response = self.client.post(
            f"/api/admin/homepage/{path}",
            files={"file": (name, PNG_BYTES, "image/png")},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["url"]


class PublicContentTests(HomepageTestCase):
    def test_defaults_when_nothing_is_configured(self):
        content = self.client.get("/api/homepage-content").json()
        self.assertEqual(content["slides"], [])
        self.assertEqual(content["testimonials"], [])
        self.assertEqual(content["instagramPosts"], [])
        self.assertEqual(
            content["aboutSection"],
            {
                "about_us_title": "Dreamcatcher powstał z pasji do opowiadania historii obrazem",
                "about_us_text": "Opis domyślny...",
                "about_us_image_url": None,
            },
        )

    def test_content_follows_display_order(self):
        first = self._post("slides", {"image_url": "https://cdn.test/a.png", "title": "A"})
        second = self._post("slides", {"image_url": "https://cdn.test/b.png", "title": "B"})
        self.client.post(
            "/api/admin/homepage/slides/order",
            json={"orderedIds": [second["id"], first["id"]]},
            headers=self.admin,
        )
        self._post("testimonials", {"author": "Kasia", "content": "Piękny film!"})
        self._post("testimonials", {"author": "Tomek", "content": "Polecamy."})

        content = self.client.get("/api/homepage-content").json()
        self.assertEqual([s["title"] for s in content["slides"]], ["B", "A"])
        self.assertEqual([t["author"] for t in content["testimonials"]], ["Kasia", "Tomek"])


class SlideTests(HomepageTestCase):
    def test_upload_create_update(self):
        image_url = self._upload("slides/upload")
        self.assertTrue(image_url.startswith("https://cdn.test/homepage/"))

        slide = self._post(
            "slides", {"image_url": image_url, "title": "Wasza historia", "button_link": "/kontakt"}
        )
        self.assertEqual(slide["sort_order"], 0)

        response = self.client.patch(
            f"/api/admin/homepage/slides/{slide['id']}",
            json={"subtitle": "Filmy ślubne"},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["subtitle"], "Filmy ślubne")
        self.assertEqual(response.json()["title"], "Wasza historia")

        response = self.client.patch(
            f"/api/admin/homepage/slides/{slide['id']}", json={"image_url": None}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_removes_image(self):
        slide = self._post("slides", {"image_url": "https://cdn.test/homepage/a.png"})
        url = f"/api/admin/homepage/slides/{slide['id']}"

        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.storage.deleted, ["https://cdn.test/homepage/a.png"])
        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 404)

    def test_failed_image_delete_still_removes_slide(self):
        slide = self._post("slides", {"image_url": "https://cdn.test/homepage/a.png"})
        self.storage.fail_deletes = True

        response = self.client.delete(
            f"/api/admin/homepage/slides/{slide['id']}", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        with self.session() as db:
            self.assertEqual(db.query(HomepageSlide).count(), 0)

    def test_requires_admin(self):
        self.assertEqual(self.client.get("/api/admin/homepage/slides").status_code, 401)


class AboutSectionTests(HomepageTestCase):
    def test_update_is_visible_to_admin_and_public(self):
        image_url = self._upload("about/upload")
        response = self.client.patch(
            "/api/admin/homepage/about",
            json={"title": "O nas", "text": "Kręcimy od 2015 roku.", "image_url": image_url},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Sekcja O nas zaktualizowana.")

        admin_view = self.client.get("/api/admin/homepage/about", headers=self.admin).json()
        self.assertEqual(
            admin_view, {"title": "O nas", "text": "Kręcimy od 2015 roku.", "image_url": image_url}
        )

        about = self.client.get("/api/homepage-content").json()["aboutSection"]
        self.assertEqual(about["about_us_title"], "O nas")
        self.assertEqual(about["about_us_image_url"], image_url)

    def test_partial_update_keeps_other_fields(self):
        self.client.patch(
            "/api/admin/homepage/about", json={"title": "O nas", "text": "Tekst"}, headers=self.admin
        )
        self.client.patch("/api/admin/homepage/about", json={"text": "Nowy tekst"}, headers=self.admin)

        admin_view = self.client.get("/api/admin/homepage/about", headers=self.admin).json()
        self.assertEqual(admin_view["title"], "O nas")
        self.assertEqual(admin_view["text"], "Nowy tekst")
        self.assertIsNone(admin_view["image_url"])

    def test_unknown_field_is_400(self):
        response = self.client.patch(
            "/api/admin/homepage/about", json={"subtitle": "x"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)


class TestimonialTests(HomepageTestCase):
    def test_crud(self):
        testimonial = self._post("testimonials", {"author": "Kasia", "content": "Piękny film!"})
        url = f"/api/admin/homepage/testimonials/{testimonial['id']}"

        response = self.client.patch(url, json={"content": "Najpiękniejszy film!"}, headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["author"], "Kasia")
        self.assertEqual(response.json()["content"], "Najpiękniejszy film!")

        listed = self.client.get("/api/admin/homepage/testimonials", headers=self.admin).json()
        self.assertEqual([t["id"] for t in listed], [testimonial["id"]])

        self.assertEqual(self.client.delete(url, headers=self.admin).status_code, 204)
        self.assertEqual(self.client.patch(url, json={"author": "X"}, headers=self.admin).status_code, 404)

    def test_missing_content_is_400(self):
        response = self.client.post(
            "/api/admin/homepage/testimonials", json={"author": "Kasia"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Brak wymaganego pola: content.")


class InstagramTests(HomepageTestCase):
    def _create_post(self, caption):
        image_url = self._upload("instagram/upload")
        return self._post(
            "instagram",
            {"post_url": "https://www.instagram.com/p/abc/", "image_url": image_url, "caption": caption},
        )

    def test_order_and_delete(self):
        first = self._create_post("Pierwszy")
        second = self._create_post("Drugi")

        response = self.client.post(
            "/api/admin/homepage/instagram/order",
            json={"orderedIds": [second["id"], first["id"]]},
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        listed = self.client.get("/api/admin/homepage/instagram", headers=self.admin).json()
        self.assertEqual([p["caption"] for p in listed], ["Drugi", "Pierwszy"])

        response = self.client.delete(
            f"/api/admin/homepage/instagram/{first['id']}", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.storage.deleted, [first["image_url"]])

        posts = self.client.get("/api/homepage-content").json()["instagramPosts"]
        self.assertEqual([p["id"] for p in posts], [second["id"]])

    def test_failed_image_delete_still_removes_post(self):
        post = self._create_post("Kadr")
        self.storage.fail_deletes = True
        response = self.client.delete(
            f"/api/admin/homepage/instagram/{post['id']}", headers=self.admin
        )
        self.assertEqual(response.status_code, 204)
        with self.session() as db:
            self.assertEqual(db.query(HomepageInstagramPost).count(), 0)


if __name__ == "__main__":
    unittest.main()
