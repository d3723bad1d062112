from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from products_api.core.exceptions import ProductNotFoundError, ProductServiceError
from products_api.dao.product_dao import product_dao
from products_api.models.product import Product, SQL_INTEGER_MAX
from products_api.schemas.product_schemas import ProductPayload
import structlog

logger = structlog.get_logger()


class ProductService:
    """Maps product operations onto the DAO and DAO outcomes onto domain errors.

    Absence is reported as ProductNotFoundError; anything else the store
    raises is logged and re-raised as ProductServiceError.
    """

    def __init__(self, dao=None):
        self.product_dao = dao or product_dao

    @staticmethod
    def _check_id(product_id: int) -> None:
        # Ids the store cannot represent can never match a row
        if not -SQL_INTEGER_MAX - 1 <= product_id <= SQL_INTEGER_MAX:
            logger.warning("Product not found", product_id=product_id)
            raise ProductNotFoundError(product_id)

    async def list_products(self, db: AsyncSession) -> List[Product]:
        try:
            products = await self.product_dao.get_all(db)
            logger.info("Retrieved products", count=len(products))
            return products
        except Exception as e:
            logger.error("Error getting products", error=str(e))
            raise ProductServiceError("Could not retrieve products") from e

    async def get_product(self, db: AsyncSession, product_id: int) -> Product:
        self._check_id(product_id)
        try:
            product = await self.product_dao.get_by_id(db, product_id)
        except Exception as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise ProductServiceError("Could not retrieve product", {"product_id": product_id}) from e

        if not product:
            logger.warning("Product not found", product_id=product_id)
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, db: AsyncSession, payload: ProductPayload) -> Product:
        try:
            product = await self.product_dao.create(db, obj_in=payload.model_dump())
            logger.info("Product created successfully", product_id=product.id)
            return product
        except Exception as e:
            logger.error("Error creating product", error=str(e))
            raise ProductServiceError("Product creation failed") from e

    async def update_product(self, db: AsyncSession, product_id: int, payload: ProductPayload) -> Product:
        product = await self.get_product(db, product_id)
        try:
            product = await self.product_dao.update(db, db_obj=product, obj_in=payload.model_dump())
            logger.info("Product updated successfully", product_id=product_id)
            return product
        except Exception as e:
            logger.error("Error updating product", product_id=product_id, error=str(e))
            raise ProductServiceError("Product update failed", {"product_id": product_id}) from e

    async def delete_product(self, db: AsyncSession, product_id: int) -> int:
        self._check_id(product_id)
        try:
            deleted_product = await self.product_dao.delete(db, id=product_id)
        except Exception as e:
            logger.error("Error deleting product", product_id=product_id, error=str(e))
            raise ProductServiceError("Product deletion failed", {"product_id": product_id}) from e

        if not deleted_product:
            logger.warning("Product not found", product_id=product_id)
            raise ProductNotFoundError(product_id)
        logger.info("Product deleted successfully", product_id=product_id)
        return product_id


product_service = ProductService()
