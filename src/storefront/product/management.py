"""Catalog management: commands and handler.

None of these commands take part in order placement. ``RestockSize`` is the
only catalog operation that writes stock; it runs in its own unit of work like
every other handler, so it serializes against order transactions through the
store's versioning.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.errors import ProductNotFound
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    sizes: Text()  # JSON: [{"size": "M", "stock": 5}, ...]
    price: Float(min_value=0.0)
    discount_price: Float(min_value=0.0)
    description: Text()
    image: String(max_length=500)
    is_new_arrival: Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    category: String(max_length=100)
    description: Text()
    price: Float(min_value=0.0)
    discount_price: Float(min_value=0.0)
    clear_discount: Boolean(default=False)
    image: String(max_length=500)
    is_new_arrival: Boolean()


@storefront.command(part_of="Product")
class RestockSize:
    product_id: Identifier(required=True)
    size: String(required=True, max_length=20)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


def _parse_sizes(raw):
    if not raw:
        return []
    try:
        sizes = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise ValidationError({"sizes": ["Sizes must be valid JSON"]}) from None
    if not isinstance(sizes, list) or not all(isinstance(entry, dict) for entry in sizes):
        raise ValidationError({"sizes": ["Sizes must be a list of {size, stock} objects"]})
    return sizes


def _load(repo, product_id):
    try:
        return repo.get(product_id)
    except ObjectNotFoundError:
        raise ProductNotFound(product_id) from None


@storefront.command_handler(part_of=Product)
class ManageCatalogHandler:
    @handle(AddProduct)
    def add_product(self, command):
        sizes = _parse_sizes(command.sizes)
        product = Product.create(
            name=command.name,
            category=command.category,
            sizes=sizes,
            price=command.price,
            discount_price=command.discount_price,
            description=command.description,
            image=command.image,
            is_new_arrival=command.is_new_arrival,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), sizes=len(product.sizes))
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        product.update_details(
            name=command.name,
            category=command.category,
            description=command.description,
            price=command.price,
            discount_price=command.discount_price,
            image=command.image,
            is_new_arrival=command.is_new_arrival,
            clear_discount=command.clear_discount,
        )
        repo.add(product)

    @handle(RestockSize)
    def restock_size(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        entry = product.restock(command.size, command.quantity)
        repo.add(product)
        logger.info(
            "Size restocked",
            product_id=str(product.id),
            size=command.size,
            quantity=command.quantity,
            new_stock=entry.stock,
        )
        return entry.stock

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _load(repo, command.product_id)
        repo._dao.delete(product)
        logger.info("Product removed", product_id=str(command.product_id))
