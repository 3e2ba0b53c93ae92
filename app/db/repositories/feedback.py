# app/db/repositories/feedback.py
from typing import List, Optional

from sqlalchemy import select

from app.db.models.feedback import Feedback
from app.db.repositories.base import SqlRepository


class FeedbackRepository(SqlRepository):

    def get_for_order(self, order_id: int) -> Optional[Feedback]:
        return self.db.scalars(select(Feedback).where(Feedback.order_id == order_id)).first()

    def list_newest_first(self) -> List[Feedback]:
        return list(self.db.scalars(select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc())))
