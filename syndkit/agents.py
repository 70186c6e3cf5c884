"""Player agents: health, cybernetic modification slots and weapon inventory."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Callable

MAX_HEALTH = 255
NUM_SLOTS = 6


class Slot(IntEnum):
    """Body locations that can hold a modification."""

    BRAIN = 0
    EYES = 1
    HEART = 2
    CHEST = 3
    ARMS = 4
    LEGS = 5


AGENT_NAMES = (
    "AFSHAR", "ARNOLD", "BAIRD", "BALDWIN", "BLACK", "BOYD", "BOYESEN",
    "BRAZIER", "BROWN", "BUSH", "CARR", "CHRISMAS", "CLINTON", "COOPER",
    "CORPES", "COX", "DAWSON", "DONKIN", "DISKETT", "DUNNE", "EDGAR",
    "EVANS", "FAIRLEY", "FAWCETT", "FLINT", "FLOYD", "GRIFFITHS", "HARRIS",
    "HASTINGS", "HERBERT", "HICKMAN", "HICKS", "HILL", "JAMES", "JEFFERY",
    "JOESEPH", "JOHNSON", "JOHNSTON", "JONES", "LEWIS", "LINDSELL",
    "LOCKLEY", "MARTIN", "MCENTEE", "MCLAUGHIN", "MOLYNEUX", "MUNRO",
    "MORRIS", "MUMFORD", "NIXON", "PARKER", "PRATT", "REID", "RENNIE",
    "RICE", "RIPLEY", "ROBERTSON", "ROMANO", "SEAT", "SEN", "SHAW",
    "SIMMONS", "SNELLING", "TAYLOR", "TROWERS", "WEBLEY", "WELLESLEY",
    "WILD", "WILLIS",
)


def _check_slot(n: int) -> int:
    index = int(n)
    if not 0 <= index < NUM_SLOTS:
        raise IndexError(f"slot {n} out of range")
    return index


class Agent:
    """An agent with health, six modification slots and carried weapons."""

    def __init__(self, name: str, male: bool) -> None:
        self.name = name
        self.male = male
        self.active = True
        self._health = MAX_HEALTH
        self._slots: list[Any] = [None] * NUM_SLOTS
        self.weapons: list[Any] = []

    def __repr__(self) -> str:
        sex = "male" if self.male else "female"
        return f"Agent({self.name!r}, {sex}, health={self._health})"

    @property
    def health(self) -> int:
        return self._health

    @health.setter
    def health(self, value: int) -> None:
        self._health = min(value, MAX_HEALTH)

    def slot(self, n: int) -> Any:
        """Return the modification in slot ``n``, or None."""
        return self._slots[_check_slot(n)]

    def set_slot(self, n: int, mod: Any) -> None:
        """Put ``mod`` into slot ``n``."""
        self._slots[_check_slot(n)] = mod

    def clear_slots(self) -> None:
        """Empty every modification slot."""
        self._slots = [None] * NUM_SLOTS

    def add_weapon(self, weapon: Any) -> None:
        """Append a weapon to the inventory."""
        self.weapons.append(weapon)

    def remove_weapon(self, index: int) -> Any:
        """Take the weapon at ``index`` out of the inventory and return it."""
        return self.weapons.pop(index)

    def remove_all_weapons(self) -> None:
        """Drop every carried weapon."""
        self.weapons.clear()


class AgentManager:
    """The pool of agents the player can recruit from."""

    def __init__(self) -> None:
        self.agents: list[Agent] = []

    def load_agents(self) -> None:
        """Create a male and a female agent for every known name."""
        for name in AGENT_NAMES:
            self.agents.append(Agent(name, True))
            self.agents.append(Agent(name, False))

    def reset(self, starting_weapon: Callable[[], Any]) -> None:
        """Restore every agent to full health, no mods and one new starting weapon.

        ``starting_weapon`` is called once per agent to create its weapon.
        """
        for agent in self.agents:
            agent.health = MAX_HEALTH
            agent.clear_slots()
            agent.remove_all_weapons()
            agent.add_weapon(starting_weapon())

    def agent(self, n: int) -> Agent:
        """Return the agent at position ``n``."""
        if not 0 <= n < len(self.agents):
            raise IndexError(f"agent {n} out of range")
        return self.agents[n]

    def __len__(self) -> int:
        return len(self.agents)