"""Project Board Service — reorders websites and apps on one shared board.

Invariants:
    - Every referenced website and app must exist before any priority changes
    - All priority changes commit together
"""

from sqlalchemy.ext.asyncio import AsyncSession

from pvs_api.core.domain_types import ReorderItemType
from pvs_api.core.errors import ResourceNotFoundError
from pvs_api.services.apps import AppService
from pvs_api.services.websites import WebsiteService


class ProjectBoardService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.websites = WebsiteService(db)
        self.apps = AppService(db)

    async def reorder(self, items: list[dict]) -> dict:
        website_items = [i for i in items if i["type"] == ReorderItemType.WEBSITE]
        app_items = [i for i in items if i["type"] == ReorderItemType.APP]

        for item in website_items:
            if await self.websites.find_by_id(item["id"]) is None:
                raise ResourceNotFoundError(
                    "Website", str(item["id"]),
                    detail=f"Website with id {item['id']} not found",
                )
        for item in app_items:
            if await self.apps.find_by_id(item["id"]) is None:
                raise ResourceNotFoundError(
                    "App", str(item["id"]),
                    detail=f"App with id {item['id']} not found",
                )

        websites = [
            await self.websites.update_priority(i["id"], i["priority"])
            for i in website_items
        ]
        apps = [
            await self.apps.update_priority(i["id"], i["priority"])
            for i in app_items
        ]
        await self.db.commit()
        for row in (*websites, *apps):
            await self.db.refresh(row)
        return {
            "message": "Priorities updated successfully",
            "updated": {"websites": len(websites), "apps": len(apps)},
            "items": {
                "websites": [w.to_dict() for w in websites],
                "apps": [a.to_dict() for a in apps],
            },
        }
