"""Auto-categorization and merchant detection jobs.

These functions take any number of transactions, split them into batches the
provider accepts, and write the suggestions back onto the transactions:

- auto_category_id, from the category whose name the LLM picked
- auto_merchant_name and auto_merchant_url, from the detected business

A batch that fails is logged and skipped; the other batches still run, so a
single bad response never loses a whole import.
"""

from typing import Iterator, List, Optional, Sequence, TypeVar
from models.transaction import Transaction
from models.category import Category
from models.merchant import Merchant
from config import Config
from llm import get_llm_provider
from llm.providers.base import LLMProvider
from logger import get_logger

logger = get_logger()

T = TypeVar("T")

BATCH_SIZE = 25


def batched(items: Sequence[T], size: int = BATCH_SIZE) -> Iterator[List[T]]:
    """Yield consecutive slices of at most size items."""
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def _resolve_provider(
    config: Optional[Config], provider: Optional[LLMProvider]
) -> Optional[LLMProvider]:
    if provider is not None:
        return provider

    if config is None:
        logger.info("No config provided - skipping LLM call")
        return None

    try:
        return get_llm_provider(config)
    except Exception as e:
        logger.error(f"Failed to initialize LLM provider: {e}")
        return None


def _resolve_model(
    provider: LLMProvider, config: Optional[Config], model: Optional[str]
) -> Optional[str]:
    model = model or (config.llm_openrouter_model if config else None)
    if not model or not provider.supports_model(model):
        logger.warning(f"Model {model!r} is not supported by {provider.name()}")
        return None
    return model


def auto_categorize(
    transactions: List[Transaction],
    categories: List[Category],
    config: Optional[Config] = None,
    provider: Optional[LLMProvider] = None,
    model: Optional[str] = None,
) -> List[Transaction]:
    """Automatically categorize transactions using an LLM.

    Args:
        transactions: Transactions to categorize.
        categories: All user-defined categories.
        config: Used to build the provider and pick the default model.
        provider: Provider to use instead of building one from config.
        model: Model to use instead of the configured default.

    Returns:
        The same list of transactions with auto_category_id set where the
        LLM found a matching category.
    """
    logger.info(
        f"Auto-categorization called with {len(transactions)} transactions, "
        f"{len(categories)} categories"
    )

    if not transactions:
        return transactions

    provider = _resolve_provider(config, provider)
    if provider is None:
        logger.info("LLM categorization disabled - skipping")
        return transactions

    if not categories:
        logger.warning("No categories available - cannot categorize transactions")
        return transactions

    model = _resolve_model(provider, config, model)
    if model is None:
        return transactions

    categories_by_name = {c.name: c for c in categories}
    transactions_by_id = {t.id: t for t in transactions}

    for batch in batched(transactions):
        response = provider.auto_categorize(batch, categories, model=model)
        if not response.success:
            logger.error(f"LLM categorization failed for batch: {response.error}")
            continue

        for categorization in response.data:
            txn = transactions_by_id.get(categorization.transaction_id)
            category = categories_by_name.get(categorization.category_name)
            if txn is None or category is None:
                continue

            txn.auto_category_id = category.id
            logger.debug(f"Transaction {txn.id[:8]}... auto-categorized as {category.name}")

    categorized_count = sum(1 for t in transactions if t.auto_category_id is not None)
    logger.info(
        f"Successfully auto-categorized {categorized_count}/{len(transactions)} transactions"
    )

    return transactions


def auto_detect_merchants(
    transactions: List[Transaction],
    merchants: List[Merchant],
    config: Optional[Config] = None,
    provider: Optional[LLMProvider] = None,
    model: Optional[str] = None,
) -> List[Transaction]:
    """Detect the business behind each transaction using an LLM.

    Unlike categorization this runs with an empty merchant list, since the
    model can recognize well-known businesses on its own.

    Returns:
        The same list of transactions with auto_merchant_name and
        auto_merchant_url set where a business was detected.
    """
    logger.info(
        f"Merchant detection called with {len(transactions)} transactions, "
        f"{len(merchants)} user merchants"
    )

    if not transactions:
        return transactions

    provider = _resolve_provider(config, provider)
    if provider is None:
        logger.info("LLM merchant detection disabled - skipping")
        return transactions

    model = _resolve_model(provider, config, model)
    if model is None:
        return transactions

    transactions_by_id = {t.id: t for t in transactions}

    for batch in batched(transactions):
        response = provider.auto_detect_merchants(batch, merchants, model=model)
        if not response.success:
            logger.error(f"LLM merchant detection failed for batch: {response.error}")
            continue

        for detected in response.data:
            txn = transactions_by_id.get(detected.transaction_id)
            if txn is None or detected.business_name is None:
                continue

            txn.auto_merchant_name = detected.business_name
            txn.auto_merchant_url = detected.business_url

    detected_count = sum(1 for t in transactions if t.auto_merchant_name is not None)
    logger.info(
        f"Detected merchants for {detected_count}/{len(transactions)} transactions"
    )

    return transactions
