"""In-memory garden persistence with optimistic concurrency."""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from garden_management.domain.garden.aggregate import Garden
from garden_management.domain.garden.exceptions import GardenNotFoundError
from garden_management.domain.garden.repository import GardenRepository, GardenUnitOfWork
from garden_management.domain.garden.value_objects import GardenId, UserId
from garden_management.infrastructure.logging.logger import get_logger

from .exceptions import ConcurrencyError, PersistenceError

logger = get_logger(__name__)


class TransactionState(str, Enum):
    """Unit of work state."""
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    FAILED = "failed"


class WriteKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    TOMBSTONE = "tombstone"


@dataclass
class StagedWrite:
    """One change waiting for commit."""
    kind: WriteKind
    garden: Garden
    expected_version: Optional[int] = None
    keep_stored_plants: bool = False


@dataclass
class _Row:
    version: int
    garden: Garden


def clone_garden(garden: Garden, with_plants: bool = True) -> Garden:
    """Copy a garden's state without its pending events."""
    return Garden.from_persistence(
        id=garden.id,
        user_id=garden.user_id,
        name=garden.name,
        total_surface_area=garden.total_surface_area.value,
        target_humidity_level=garden.target_humidity_level.value,
        created_at=garden.created_at,
        updated_at=garden.updated_at,
        is_deleted=garden.is_deleted,
        deleted_at=garden.deleted_at,
        plants=[plant.model_copy() for plant in garden.plants] if with_plants else None,
    )


class InMemoryGardenStore:
    """
    Process-local garden table.

    Each row carries a version stamp that is bumped on every committed write.
    Readers always receive copies, so two units of work never share state.
    """

    def __init__(self):
        self._rows: Dict[GardenId, _Row] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def __contains__(self, garden_id: GardenId) -> bool:
        with self._lock:
            return garden_id in self._rows

    def load(self, garden_id: GardenId, with_plants: bool = True) -> Optional[Tuple[Garden, int]]:
        """Return a copy of the stored garden and its version, or ``None``."""
        with self._lock:
            row = self._rows.get(garden_id)
            if row is None:
                return None
            return clone_garden(row.garden, with_plants), row.version

    def load_by_user(self, user_id: UserId) -> List[Tuple[Garden, int]]:
        with self._lock:
            return [
                (clone_garden(row.garden, with_plants=False), row.version)
                for row in self._rows.values()
                if row.garden.user_id == user_id
            ]

    def version_of(self, garden_id: GardenId) -> Optional[int]:
        with self._lock:
            row = self._rows.get(garden_id)
            return row.version if row is not None else None

    def apply(self, writes: List[StagedWrite]) -> None:
        """
        Apply a batch of writes atomically.

        Every write is checked before any is applied; a single stale or
        duplicate write rejects the whole batch.

        Raises:
            ConcurrencyError: If a row changed since it was loaded, or an
                inserted garden already exists
        """
        with self._lock:
            for write in writes:
                self._check(write)
            for write in writes:
                self._write(write)

    def _check(self, write: StagedWrite) -> None:
        garden_id = write.garden.id
        row = self._rows.get(garden_id)
        if write.kind == WriteKind.INSERT:
            if row is not None:
                raise ConcurrencyError(
                    f"Garden {garden_id} already exists",
                    details={"garden_id": str(garden_id)},
                )
            return
        if row is None:
            raise ConcurrencyError(
                f"Garden {garden_id} no longer exists",
                details={"garden_id": str(garden_id)},
            )
        if row.version != write.expected_version:
            raise ConcurrencyError(
                f"Garden {garden_id} was modified by another unit of work",
                details={
                    "garden_id": str(garden_id),
                    "expected_version": write.expected_version,
                    "actual_version": row.version,
                },
            )

    def _write(self, write: StagedWrite) -> None:
        garden_id = write.garden.id
        if write.kind == WriteKind.INSERT:
            self._rows[garden_id] = _Row(version=1, garden=clone_garden(write.garden))
            return

        row = self._rows[garden_id]
        if write.kind == WriteKind.TOMBSTONE:
            stored = clone_garden(row.garden)
            stored.is_deleted = True
            stored.deleted_at = write.garden.deleted_at
            stored.updated_at = write.garden.updated_at
        else:
            stored = clone_garden(write.garden)
            if write.keep_stored_plants:
                stored.plants = [plant.model_copy() for plant in row.garden.plants]
        self._rows[garden_id] = _Row(version=row.version + 1, garden=stored)


class InMemoryGardenRepository(GardenRepository):
    """
    Garden repository scoped to one unit of work.

    Keeps an identity map of the gardens it handed out together with the
    version each was read at, and stages writes until the unit of work commits.
    """

    def __init__(self, store: InMemoryGardenStore):
        self._store = store
        self._identity: Dict[GardenId, Garden] = {}
        self._versions: Dict[GardenId, int] = {}
        self._without_plants: Set[GardenId] = set()
        self._staged: Dict[GardenId, StagedWrite] = {}

    def get_by_id(self, garden_id: GardenId, include_deleted: bool = False) -> Optional[Garden]:
        return self._get(garden_id, include_deleted, with_plants=False)

    def get_by_id_with_plants(self, garden_id: GardenId,
                              include_deleted: bool = False) -> Optional[Garden]:
        return self._get(garden_id, include_deleted, with_plants=True)

    def list_by_user(self, user_id: UserId) -> List[Garden]:
        gardens = []
        for garden, version in self._store.load_by_user(user_id):
            if garden.is_deleted:
                continue
            gardens.append(self._track(garden, version, with_plants=False))
        return sorted(gardens, key=lambda g: g.name)

    def add(self, garden: Garden) -> None:
        self._identity[garden.id] = garden
        self._staged[garden.id] = StagedWrite(WriteKind.INSERT, garden)

    def save(self, garden: Garden) -> None:
        if garden.id in self._staged and self._staged[garden.id].kind == WriteKind.INSERT:
            return
        self._staged[garden.id] = StagedWrite(
            WriteKind.UPDATE,
            garden,
            expected_version=self._expected_version(garden.id),
            keep_stored_plants=garden.id in self._without_plants,
        )

    def remove(self, garden: Garden) -> None:
        if garden.id not in self._store:
            raise GardenNotFoundError(str(garden.id))
        self._staged[garden.id] = StagedWrite(
            WriteKind.TOMBSTONE,
            garden,
            expected_version=self._expected_version(garden.id),
        )

    def staged_writes(self) -> List[StagedWrite]:
        return list(self._staged.values())

    def reset(self) -> None:
        self._identity.clear()
        self._versions.clear()
        self._without_plants.clear()
        self._staged.clear()

    def _get(self, garden_id: GardenId, include_deleted: bool,
             with_plants: bool) -> Optional[Garden]:
        garden = self._identity.get(garden_id)
        if garden is None or (with_plants and garden_id in self._without_plants):
            loaded = self._store.load(garden_id, with_plants)
            if loaded is None:
                return None
            garden = self._track(*loaded, with_plants=with_plants)

        if garden.is_deleted and not include_deleted:
            return None
        return garden

    def _track(self, garden: Garden, version: int, with_plants: bool) -> Garden:
        known = self._identity.get(garden.id)
        if known is not None and (not with_plants or garden.id not in self._without_plants):
            return known

        self._identity[garden.id] = garden
        # keep the oldest version seen so a concurrent write is still detected
        self._versions.setdefault(garden.id, version)
        if with_plants:
            self._without_plants.discard(garden.id)
        else:
            self._without_plants.add(garden.id)
        return garden

    def _expected_version(self, garden_id: GardenId) -> int:
        if garden_id not in self._versions:
            raise PersistenceError(
                f"Garden {garden_id} must be loaded before it can be written",
                details={"garden_id": str(garden_id)},
            )
        return self._versions[garden_id]


class InMemoryUnitOfWork(GardenUnitOfWork):
    """Unit of work over an :class:`InMemoryGardenStore`."""

    def __init__(self, store: InMemoryGardenStore):
        self._store = store
        self.gardens = InMemoryGardenRepository(store)
        self.state = TransactionState.ACTIVE

    def commit(self) -> None:
        if self.state != TransactionState.ACTIVE:
            raise PersistenceError(f"Cannot commit a unit of work that is {self.state.value}")

        writes = self.gardens.staged_writes()
        try:
            self._store.apply(writes)
        except ConcurrencyError as e:
            self.state = TransactionState.FAILED
            logger.warning("Unit of work commit rejected", error=e.message, **e.details)
            raise
        finally:
            self.gardens.reset()

        self.state = TransactionState.COMMITTED
        logger.debug("Unit of work committed", writes=len(writes))

    def rollback(self) -> None:
        if self.state != TransactionState.ACTIVE:
            return
        discarded = len(self.gardens.staged_writes())
        self.gardens.reset()
        self.state = TransactionState.ROLLED_BACK
        logger.debug("Unit of work rolled back", discarded=discarded)
