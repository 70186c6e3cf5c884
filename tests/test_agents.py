import pytest

from syndkit.agents import AGENT_NAMES, Agent, AgentManager, Slot


def test_new_agent_defaults():
    agent = Agent("COOPER", False)
    assert agent.name == "COOPER"
    assert agent.male is False
    assert agent.active is True
    assert agent.health == 255
    assert all(agent.slot(n) is None for n in range(6))
    assert agent.weapons == []


def test_health_is_capped():
    agent = Agent("HILL", True)
    agent.health = 1000
    assert agent.health == 255
    agent.health = 40
    assert agent.health == 40


def test_slots_set_and_clear():
    agent = Agent("HILL", True)
    agent.set_slot(Slot.LEGS, "legs-v1")
    agent.set_slot(0, "brain-v2")
    assert agent.slot(5) == "legs-v1"
    assert agent.slot(Slot.BRAIN) == "brain-v2"
    agent.clear_slots()
    assert agent.slot(Slot.LEGS) is None
    assert agent.slot(Slot.BRAIN) is None


@pytest.mark.parametrize("bad", [6, 7, -1])
def test_slot_out_of_range(bad):
    agent = Agent("HILL", True)
    with pytest.raises(IndexError):
        agent.slot(bad)
    with pytest.raises(IndexError):
        agent.set_slot(bad, "mod")


def test_weapons_add_remove():
    agent = Agent("REID", True)
    agent.add_weapon("pistol")
    agent.add_weapon("shotgun")
    assert agent.remove_weapon(0) == "pistol"
    assert agent.weapons == ["shotgun"]
    agent.remove_all_weapons()
    assert agent.weapons == []


def test_load_agents_pairs_each_name():
    manager = AgentManager()
    manager.load_agents()
    assert len(manager) == 2 * len(AGENT_NAMES)
    first, second = manager.agent(0), manager.agent(1)
    assert first.name == "AFSHAR" and first.male
    assert second.name == "AFSHAR" and not second.male
    last = manager.agent(len(manager) - 1)
    assert last.name == "WILLIS" and not last.male


def test_agent_index_out_of_range():
    manager = AgentManager()
    manager.load_agents()
    with pytest.raises(IndexError):
        manager.agent(len(manager))


def test_reset_restores_agents():
    manager = AgentManager()
    manager.load_agents()
    a = manager.agent(3)
    a.health = 10
    a.set_slot(Slot.ARMS, "arms")
    a.add_weapon("laser")
    created = []

    def factory():
        weapon = object()
        created.append(weapon)
        return weapon

    manager.reset(factory)
    assert len(created) == len(manager)
    assert a.health == 255
    assert a.slot(Slot.ARMS) is None
    assert len(a.weapons) == 1
    assert a.weapons[0] in created
    assert len({id(ag.weapons[0]) for ag in manager.agents}) == len(manager)