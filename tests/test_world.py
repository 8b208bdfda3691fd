"""Tests for kinship/world.py — persons, player registry, relative lookup."""
import pytest

from kinship.relations import Gender, RelationKind as R
from kinship.world import Person, PlayerRegistry, UnknownPlayer, World


class TestPerson:
    def test_tree_attached(self):
        p = Person(12, "Ada", Gender.FEMALE)
        assert p.family_tree.owner_gender is Gender.FEMALE
        assert p.family_tree.owner_id == 12
        assert not p.is_player

    def test_player(self):
        assert Person(-4, "steve", Gender.MALE).is_player

    def test_id_zero(self):
        with pytest.raises(ValueError):
            Person(0, "Nobody", Gender.MALE)


class TestPlayerRegistry:
    def test_gender_of(self):
        reg = PlayerRegistry()
        reg.register(-1, "alex", Gender.FEMALE)
        assert reg.gender_of(-1) is Gender.FEMALE
        assert reg.username_of(-1) == "alex"
        assert reg.properties("alex")["gender"] is Gender.FEMALE
        assert -1 in reg
        assert len(reg) == 1

    def test_unknown_id(self):
        with pytest.raises(UnknownPlayer):
            PlayerRegistry().gender_of(-5)

    def test_unknown_username(self):
        with pytest.raises(UnknownPlayer):
            PlayerRegistry().properties("ghost")

    def test_unknown_player_is_lookup_error(self):
        with pytest.raises(LookupError):
            PlayerRegistry().username_of(-5)

    def test_rejects_non_player_id(self):
        with pytest.raises(ValueError):
            PlayerRegistry().register(5, "npc", Gender.MALE)

    def test_reregister_updates_gender(self):
        reg = PlayerRegistry()
        reg.register(-1, "alex", Gender.FEMALE)
        reg.register(-1, "alex", Gender.MALE)
        assert reg.gender_of(-1) is Gender.MALE


class TestWorld:
    def test_spawn_uses_registry(self, world):
        villager = world.spawn(30, "Villager", Gender.MALE)
        villager.family_tree.add(-17, R.GRANDPARENT)
        assert villager.family_tree.relation_of(-17) is R.GRANDFATHER
        assert world.get(30) is villager

    def test_remove(self, world):
        world.spawn(30, "Villager", Gender.MALE)
        world.remove(30)
        assert world.get(30) is None
        assert world.persons() == []

    def test_find_relative(self, world):
        mom = world.spawn(1, "Mom", Gender.FEMALE)
        son = world.spawn(2, "Son", Gender.MALE)
        daughter = world.spawn(3, "Daughter", Gender.FEMALE)
        mom.family_tree.add(2, R.SON)
        mom.family_tree.add(3, R.DAUGHTER)
        son.family_tree.add(1, R.MOTHER)
        daughter.family_tree.add(1, R.MOTHER)
        # Matches on the candidate's view of the owner, not the owner's view.
        assert world.find_relative(son, R.SON) is mom
        assert world.find_relative(mom, R.MOTHER) is son

    def test_find_relative_none(self, world):
        mom = world.spawn(1, "Mom", Gender.FEMALE)
        mom.family_tree.add(2, R.SON)  # 2 is not loaded
        assert world.find_relative(mom, R.MOTHER) is None

    def test_find_relative_requires_reciprocal(self, world):
        a = world.spawn(1, "A", Gender.MALE)
        b = world.spawn(2, "B", Gender.MALE)
        a.family_tree.add(2, R.BROTHER)
        b.family_tree.add(1, R.COUSIN)
        assert world.find_relative(a, R.BROTHER) is None
        assert world.find_relative(a, R.COUSIN) is b
