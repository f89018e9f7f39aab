from dataclasses import dataclass

import structlog

from mining_bandit.src.types import ActionSpace, PartialKeys

log = structlog.get_logger(__name__)

MAX_MINES_PER_VILLAGE = 4
MIN_MINES_PER_VILLAGE = 2


@dataclass(frozen=True)
class Topology:
    """Which mines each village can reach, and which villages feed each mine.

    Village `i` reaches the consecutive mines `i, i+1, ..., i+A[i]-1`; its
    local action `a` selects mine `i + a`.
    """

    mines_per_village: tuple[tuple[int, ...], ...]
    villages_per_mine: tuple[PartialKeys, ...]

    @classmethod
    def from_action_space(cls, action_space: ActionSpace, mine_count: int) -> "Topology":
        """Build the topology implied by a per-village action space."""
        village_count = len(action_space)
        if village_count <= 0:
            raise ValueError("There must be at least one village.")
        if mine_count <= 0:
            raise ValueError("There must be at least one mine.")

        mines_per_village: list[tuple[int, ...]] = []
        villages_per_mine: list[list[int]] = [[] for _ in range(mine_count)]
        for village, n_mines in enumerate(action_space):
            if n_mines < MIN_MINES_PER_VILLAGE:
                raise ValueError(
                    f"Village {village} reaches {n_mines} mines; at least {MIN_MINES_PER_VILLAGE} are required."
                )
            if n_mines > MAX_MINES_PER_VILLAGE:
                raise ValueError(
                    f"Village {village} reaches {n_mines} mines; at most {MAX_MINES_PER_VILLAGE} are allowed."
                )
            if village + n_mines > mine_count:
                raise ValueError(
                    f"Village {village} reaches {n_mines} mines but only {mine_count - village} exist from its index."
                )
            mines = tuple(range(village, village + n_mines))
            mines_per_village.append(mines)
            for mine in mines:
                villages_per_mine[mine].append(village)

        unreachable = [mine for mine, villages in enumerate(villages_per_mine) if not villages]
        if unreachable:
            raise ValueError(f"Mines {unreachable} are not reachable from any village.")

        topology = cls(
            mines_per_village=tuple(mines_per_village),
            villages_per_mine=tuple(tuple(villages) for villages in villages_per_mine),
        )
        log.debug("topology_built", n_villages=village_count, n_mines=mine_count)
        return topology

    @classmethod
    def from_counts(cls, village_count: int, mine_count: int) -> "Topology":
        """Build the topology where every village reaches as many mines as allowed."""
        if village_count <= 0 or mine_count <= 0:
            raise ValueError("Village and mine counts must be positive.")
        action_space = tuple(
            min(MAX_MINES_PER_VILLAGE, mine_count - village) for village in range(village_count)
        )
        return cls.from_action_space(action_space, mine_count)

    @property
    def village_count(self) -> int:
        return len(self.mines_per_village)

    @property
    def mine_count(self) -> int:
        return len(self.villages_per_mine)

    @property
    def action_space(self) -> ActionSpace:
        """Number of local actions of each village."""
        return tuple(len(mines) for mines in self.mines_per_village)

    def mine_for(self, village: int, local_action: int) -> int:
        """Mine targeted by a village's local action."""
        return self.mines_per_village[village][local_action]
