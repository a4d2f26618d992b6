"""
Catalog Option Resolution

Turns a customer's option selection into the CartOption snapshots the
cart stores, enforcing each option group's min_select/max_select bounds
and the active flags of products and option items.

Author: ToHome Team
Version: 1.0.0
"""

import logging
from collections import Counter
from typing import Iterable, List

from tohome.core.exceptions import OptionSelectionError
from tohome.schemas import CartOption, CatalogProduct, ProductRef

logger = logging.getLogger(__name__)


def product_ref(product: CatalogProduct) -> ProductRef:
    """Identity and base price of a catalog product."""
    return ProductRef(id=product.id, name=product.name, base_price_cents=product.base_price_cents)


def resolve_options(product: CatalogProduct, selected_item_ids: Iterable[str]) -> List[CartOption]:
    """
    Validate a selection and build its option snapshots.

    Args:
        product: Catalog product with its option groups
        selected_item_ids: Ids of the chosen option items

    Returns:
        List[CartOption]: Snapshots ordered by group and item sort order

    Raises:
        OptionSelectionError: PRODUCT_NOT_ACTIVE, OPTION_NOT_FOUND,
            OPTION_NOT_ACTIVE, OPTION_MIN_NOT_MET or OPTION_MAX_EXCEEDED
    """
    if not product.is_active:
        raise OptionSelectionError(
            OptionSelectionError.PRODUCT_NOT_ACTIVE,
            f"{product.name} is not available",
            ref=product.id,
        )

    selected = list(dict.fromkeys(selected_item_ids))
    index = {}
    for group in product.option_groups:
        for item in group.items:
            index[item.id] = (group, item)

    per_group = Counter()
    for item_id in selected:
        if item_id not in index:
            raise OptionSelectionError(
                OptionSelectionError.OPTION_NOT_FOUND,
                f"Option {item_id} does not belong to {product.name}",
                ref=item_id,
            )
        group, item = index[item_id]
        if not item.is_active:
            raise OptionSelectionError(
                OptionSelectionError.OPTION_NOT_ACTIVE,
                f"{item.name} is not available",
                ref=item_id,
            )
        per_group[group.id] += 1

    for group in product.option_groups:
        count = per_group[group.id]
        if count < group.min_select:
            raise OptionSelectionError(
                OptionSelectionError.OPTION_MIN_NOT_MET,
                f"{group.name} requires at least {group.min_select} selection(s)",
                ref=group.id,
            )
        if count > group.max_select:
            raise OptionSelectionError(
                OptionSelectionError.OPTION_MAX_EXCEEDED,
                f"{group.name} allows at most {group.max_select} selection(s)",
                ref=group.id,
            )

    chosen = set(selected)
    options = []
    for group in sorted(product.option_groups, key=lambda g: g.sort_order):
        for item in sorted(group.items, key=lambda i: i.sort_order):
            if item.id in chosen:
                options.append(
                    CartOption(
                        group_id=group.id,
                        group_name=group.name,
                        item_id=item.id,
                        item_name=item.name,
                        price_delta_cents=item.price_delta_cents,
                    )
                )

    logger.debug(f"Resolved {len(options)} option(s) for product {product.id}")
    return options
