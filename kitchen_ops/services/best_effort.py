"""
Best-effort data access helpers.

Reads and bulk updates that must never abort the surrounding operation:
failures are logged, collected as warnings, and replaced by a default.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Tuple, TypeVar

from kitchen_ops.store.entity_store import EntityStore
from kitchen_ops.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def fetch_or_default(
    label: str,
    fetch: Callable[[], Awaitable[T]],
    default: T,
    warnings: List[str],
) -> T:
    """
    Await fetch(); on failure log it, record a warning and return a copy of default.

    A None result is treated like an empty answer and also yields the default.
    """
    try:
        result = await fetch()
    except Exception as e:
        message = f"{label} fetch failed: {e}"
        logger.warning(message)
        warnings.append(message)
        return copy.copy(default)

    if result is None:
        return copy.copy(default)
    return result


@dataclass
class BatchUpdateOutcome:
    updated: List[str] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)  # (record_id, error)

    @property
    def all_succeeded(self) -> bool:
        return not self.failures

    def warnings(self, entity: str) -> List[str]:
        return [f"{entity} {record_id} update failed: {error}" for record_id, error in self.failures]


async def best_effort_batch_update(
    store: EntityStore,
    entity: str,
    record_ids: Iterable[str],
    fields: Dict[str, Any],
) -> BatchUpdateOutcome:
    """Apply the same update to each record in turn; failures are collected, never raised"""
    outcome = BatchUpdateOutcome()
    for record_id in record_ids:
        try:
            await store.update(entity, record_id, dict(fields))
        except Exception as e:
            logger.warning(f"{entity} update failed for {record_id}: {e}")
            outcome.failures.append((record_id, str(e)))
        else:
            outcome.updated.append(record_id)
    return outcome
