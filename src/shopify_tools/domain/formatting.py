"""Plain-text rendering of products, variants and orders for tool output."""

from __future__ import annotations

from collections.abc import Mapping


def _get(mapping: object, *path: str) -> object:
    current = mapping
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _text(value: object, default: str = "N/A") -> str:
    if value is None or value == "":
        return default
    return str(value)


def _money(money: object) -> str:
    return f"{_text(_get(money, 'amount'))} {_text(_get(money, 'currencyCode'), '')}".strip()


def format_product(product: Mapping[str, object]) -> str:
    variants = product.get("variants")
    variant_lines = []
    if isinstance(variants, list):
        for variant in variants:
            if not isinstance(variant, Mapping):
                continue
            variant_lines.append(
                f"    - {_text(variant.get('title'))} "
                f"(id: {_text(variant.get('id'))}, price: {_text(variant.get('price'))}, "
                f"sku: {_text(variant.get('sku'))}, "
                f"inventoryPolicy: {_text(variant.get('inventoryPolicy'))})"
            )
    lines = [
        f"Product: {_text(product.get('title'))}",
        f"  id: {_text(product.get('id'))}",
        f"  handle: {_text(product.get('handle'))}",
        f"  description: {_text(product.get('description'))}",
        "  variants:",
        *(variant_lines or ["    (none)"]),
    ]
    return "\n".join(lines)


def format_variant(variant: Mapping[str, object]) -> str:
    available = variant.get("availableForSale")
    lines = [
        f"Variant: {_text(variant.get('title'))}",
        f"  id: {_text(variant.get('id'))}",
        f"  price: {_text(variant.get('price'))}",
        f"  sku: {_text(variant.get('sku'))}",
        f"  inventoryPolicy: {_text(variant.get('inventoryPolicy'))}",
        f"  availableForSale: {'Yes' if available else 'No'}",
    ]
    product_title = _get(variant, "product", "title")
    if product_title:
        lines.insert(1, f"  product: {product_title}")
    return "\n".join(lines)


def format_order(order: Mapping[str, object]) -> str:
    customer = order.get("customer")
    if isinstance(customer, Mapping):
        customer_text = f"{_text(customer.get('email'))} ({_text(customer.get('id'))})"
    else:
        customer_text = "Guest checkout"

    line_items = order.get("lineItems")
    item_lines = []
    if isinstance(line_items, list):
        for item in line_items:
            if not isinstance(item, Mapping):
                continue
            item_lines.append(
                f"    - {_text(item.get('title'))} x{_text(item.get('quantity'), '0')} "
                f"({_money(_get(item, 'originalTotalSet', 'shopMoney'))})"
            )

    lines = [
        f"Order: {_text(order.get('name'))}",
        f"  id: {_text(order.get('id'))}",
        f"  createdAt: {_text(order.get('createdAt'))}",
        f"  financialStatus: {_text(order.get('displayFinancialStatus'))}",
        f"  email: {_text(order.get('email'))}",
        f"  totalPrice: {_money(_get(order, 'totalPriceSet', 'shopMoney'))}",
        f"  customer: {customer_text}",
        "  lineItems:",
        *(item_lines or ["    (none)"]),
    ]
    return "\n".join(lines)
