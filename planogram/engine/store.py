import copy
import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional

from planogram.data_processing.data_validator import DataValidator
from planogram.engine.commands import ApplyPlacementBatch, Command
from planogram.engine.reducer import reduce
from planogram.models.lookup import NodePath, find_path
from planogram.models.product import Product
from planogram.models.state import PlanogramState, Project, Selection
from planogram.utils.error_handler import ConfigurationError, PlanogramError, handle_errors
from planogram.utils.logger import get_logger


@dataclass
class CommandResult:
    """Outcome of one command: the snapshot after it, or the reason it was rejected"""
    command: Command
    success: bool
    state: PlanogramState
    error: Optional[PlanogramError] = None


class PlanogramStore:
    """
    Owner of the single authoritative planogram snapshot.

    Commands are applied one at a time through `reduce`; a lock keeps two
    mutations from interleaving. Each committed command swaps in a brand new
    snapshot object, so a reader holding `store.state` always sees a complete
    tree. Snapshots handed out are shared, treat them as read-only.
    """

    def __init__(self, initial_state: Optional[PlanogramState] = None, validate: bool = True):
        self.logger = get_logger()
        state = initial_state if initial_state is not None else PlanogramState.empty()

        if validate:
            validator = DataValidator()
            is_valid, issues = validator.validate_state(state)
            if not is_valid:
                raise ConfigurationError("Initial planogram state is invalid", {'issues': issues})
            for issue in issues:
                self.logger.warning(issue)

        self._state = copy.deepcopy(state)
        self._lock = threading.Lock()
        self.committed_count = 0

    # Queries

    @property
    def state(self) -> PlanogramState:
        return self._state

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def project(self) -> Project:
        return self._state.project

    @property
    def catalog(self) -> List[Product]:
        return self._state.catalog

    def find_path(self, node_id: str, level: Optional[str] = None) -> Optional[NodePath]:
        return find_path(self._state, node_id, level)

    # Commands

    @handle_errors(raise_on_error=True)
    def dispatch(self, command: Command) -> PlanogramState:
        """Apply a command and return the new snapshot; raise and keep the old one on rejection"""
        name = type(command).__name__
        with self._lock:
            try:
                new_state = reduce(self._state, command)
            except PlanogramError as e:
                self.logger.warning(f"Rejected {name}: {e.message}")
                raise

            self._state = new_state
            self.committed_count += 1

        if isinstance(command, ApplyPlacementBatch):
            self.logger.info(f"Applied batch of {len(command.entries)} placements to shelf {command.shelf_id}")
        else:
            self.logger.debug(f"Applied {name}")
        return new_state

    def try_dispatch(self, command: Command) -> CommandResult:
        """Apply a command without raising; for collaborators feeding results back asynchronously"""
        try:
            state = self.dispatch(command)
            return CommandResult(command, True, state)
        except PlanogramError as e:
            return CommandResult(command, False, self._state, e)

    def dispatch_many(self, commands: Iterable[Command]) -> List[CommandResult]:
        """Apply independent commands in order; a rejected one does not affect the rest"""
        results = [self.try_dispatch(command) for command in commands]

        failed = sum(1 for r in results if not r.success)
        if failed:
            self.logger.info(f"Discarded {failed} of {len(results)} commands")
        return results
