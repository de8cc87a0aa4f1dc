"""Newsletter Service — per-client subscriber list."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.db.base import utcnow
from pvs_api.models.newsletter_subscriber import NewsletterSubscriber
from pvs_api.services.clients import ClientService


class NewsletterService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[NewsletterSubscriber]:
        result = await self.db.execute(select(NewsletterSubscriber))
        return list(result.scalars().all())

    async def subscribe(
        self, client_slug: str, *, first_name: str, last_name: str, email: str,
    ) -> NewsletterSubscriber:
        client_id = await ClientService(self.db).get_id_by_slug_or_404(client_slug)
        subscriber = NewsletterSubscriber(
            client_id=client_id, firstname=first_name, lastname=last_name,
            email=email, updated_at=utcnow(),
        )
        self.db.add(subscriber)
        await self.db.commit()
        return subscriber
