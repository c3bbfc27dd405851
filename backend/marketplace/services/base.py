from sqlmodel import Session

from marketplace.config import Settings


class TenantService:
    """Base for services whose records live under one (org, app) scope."""

    model = None

    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings

    def scoped(self, statement, model=None):
        model = model or self.model
        return statement.where(model.org_id == self.settings.org_id, model.app_id == self.settings.app_id)

    def get(self, record_id: str):
        record = self.session.get(self.model, record_id)
        if record is None or record.org_id != self.settings.org_id or record.app_id != self.settings.app_id:
            return None
        return record

    def tenant(self) -> dict:
        return {"org_id": self.settings.org_id, "app_id": self.settings.app_id}
