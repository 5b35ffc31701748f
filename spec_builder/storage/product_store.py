# Path: spec_builder/storage/product_store.py
"""
Product Store

Saved product specifications (LIMS_PRODUCTS).
"""

import time
from typing import Optional

from spec_builder.constants import STORAGE_KEY_PRODUCTS, AuditAction
from spec_builder.core.logger.ipo_logging import get_output_logger
from spec_builder.process.resolution.product import ProductSpecification

from .audit_log import AuditLog
from .backends import KeyValueStorage
from .json_store import JsonRecordStore


class ProductStore(JsonRecordStore):
    """
    Product specification store.

    Example:
        products = ProductStore(storage, audit_log=audit)
        products.save(product)
        products.get(product.id).code
    """

    key = STORAGE_KEY_PRODUCTS

    def __init__(self, storage: KeyValueStorage, audit_log: Optional[AuditLog] = None):
        super().__init__(storage)
        self.audit_log = audit_log
        self.logger = get_output_logger('product_store')

    def all(self) -> list[ProductSpecification]:
        """All saved products in save order."""
        return [ProductSpecification.from_dict(d) for d in self._read(default=[])]

    def get(self, product_id: str) -> Optional[ProductSpecification]:
        """Find one product by id."""
        for product in self.all():
            if product.id == product_id:
                return product
        return None

    def save(self, product: ProductSpecification) -> ProductSpecification:
        """
        Insert or replace a product by id, stamping last_modified.

        Args:
            product: Product to save

        Returns:
            The saved product
        """
        product.last_modified = int(time.time() * 1000)

        records = self._read(default=[])
        for i, record in enumerate(records):
            if record.get('id') == product.id:
                records[i] = product.to_dict()
                break
        else:
            records.append(product.to_dict())
        self._write(records)

        unresolved = len(product.unresolved_rows())
        self.logger.info(
            f"Saved product {product.code or product.id}: "
            f"{len(product.specs)} rows, {unresolved} unresolved"
        )

        if self.audit_log is not None:
            self.audit_log.record(AuditAction.SAVE_PRODUCT, f"Saved product {product.code}")

        return product


__all__ = ['ProductStore']
