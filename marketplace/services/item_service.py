# marketplace/services/item_service.py
from sqlalchemy.orm import Session

from marketplace.data.models.item import ItemModel
from marketplace.domain.errors import ConflictError, ForbiddenError, NotFoundError
from marketplace.domain.schemas import ItemCreate, ItemUpdate
from marketplace.repos.item_repo import ItemRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("title", "price")


class ItemService:
    """Catalog: listing, browsing and editing items."""

    def __init__(self, db: Session):
        self.repo = ItemRepo(db)

    # query
    def get_item(self, item_id: int) -> ItemModel:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError("Item", item_id)
        return item

    def list_items(self) -> list[ItemModel]:
        return self.repo.list_items()

    def list_by_category(self, category: str) -> list[ItemModel]:
        return self.repo.list_by_category(category)

    def list_by_seller(self, seller_id: int) -> list[ItemModel]:
        return self.repo.list_by_seller(seller_id)

    def search(self, query: str) -> list[ItemModel]:
        return self.repo.search(query)

    # commands
    def create_item(self, seller_id: int, payload: ItemCreate) -> ItemModel:
        item = ItemModel(seller_id=seller_id, **payload.model_dump())
        try:
            self.repo.add_item(item)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Error creating item for seller {seller_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Item {item.id} listed by seller {seller_id}")
        return item

    def _owned_item(self, item_id: int, seller_id: int, action: str) -> ItemModel:
        item = self.get_item(item_id)
        if item.seller_id != seller_id:
            logger.warning(f"User {seller_id} tried to {action} item {item_id} owned by {item.seller_id}")
            raise ForbiddenError(f"You can only {action} your own items")
        return item

    def update_item(self, item_id: int, seller_id: int, payload: ItemUpdate) -> ItemModel:
        item = self._owned_item(item_id, seller_id, "edit")

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(item, field, value)

        self.repo.commit()
        logger.info(f"Item {item_id} updated")
        return item

    def delete_item(self, item_id: int, seller_id: int):
        item = self._owned_item(item_id, seller_id, "delete")

        if self.repo.is_ordered(item_id):
            raise ConflictError(
                "Item cannot be deleted",
                "The item is part of a placed order",
            )

        try:
            self.repo.delete_item(item)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Error deleting item {item_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Item {item_id} deleted")
