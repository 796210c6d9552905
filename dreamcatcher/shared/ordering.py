"""Manual ordering of admin-curated lists (films, slides, Instagram posts)"""

from sqlalchemy.orm import Session


def apply_sort_order(db: Session, model, ordered_ids: list[int]) -> int:
    """
    Store each row's position in ordered_ids as its sort_order.

    IDs that match no row are skipped. Returns the number of rows updated.
    """
    updated = 0
    for position, row_id in enumerate(ordered_ids):
        updated += (
            db.query(model)
            .filter(model.id == row_id)
            .update({model.sort_order: position}, synchronize_session=False)
        )
    return updated
