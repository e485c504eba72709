import logging
import uuid
from fastapi import Depends
from sqlmodel import Session

from lostfound import errors
from lostfound.db.db import get_session
from lostfound.models.account import Account
from lostfound.models.item import Item
from lostfound.utils.form_validator import ValidatedCreateItem
from lostfound.utils.sms_service import get_notifier

logger = logging.getLogger(__name__)


class ItemStore:
    """Persistence of lost/found item reports.

    Every new report is handed to the notifier after it is staged and before
    the commit. Notification is best effort: an ``UpstreamError`` from the
    notifier is logged and the report is stored anyway.
    """

    def __init__(self, session: Session, notifier):
        self.session = session
        self.notifier = notifier

    def create(self, form: ValidatedCreateItem) -> Item:
        if not self.session.get(Account, form.account_id):
            raise errors.NotFoundError("Account not found")

        item = Item(
            post_type=form.post_type,
            item_type=form.item_type,
            location_id=form.location_id,
            account_id=form.account_id,
            color=form.color,
            material=form.material,
            image_url=form.image_url,
            image_file_name=form.image_file_name,
        )

        self.session.add(item)
        self._notify(item)

        self.session.commit()
        self.session.refresh(item)

        logger.info("%s item %s reported by account %s", item.post_type.value, item.id, item.account_id)
        return item

    def _notify(self, item: Item) -> None:
        try:
            self.notifier.item_reported(item)
        except errors.UpstreamError as e:
            logger.warning("Notification for item %s failed, storing anyway: %s", item.id, e.detail)

    def get(self, item_id: uuid.UUID) -> Item:
        item = self.session.get(Item, item_id)

        if not item:
            raise errors.NotFoundError("Item not found")

        return item


def get_item_store(
    session: Session = Depends(get_session),
    notifier=Depends(get_notifier),
) -> ItemStore:
    return ItemStore(session, notifier)
