from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from products_api.dao.base_dao import BaseDAO
from products_api.models.product import Product
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    async def get_all(self, db: AsyncSession) -> List[Product]:
        try:
            return await self.get_multi(db)
        except Exception as e:
            logger.error("Error getting all products", error=str(e))
            raise


product_dao = ProductDAO()
