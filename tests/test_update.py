"""Tests for the fixed-timestep update loop."""

from game.meteor import GameStatus, Hazard, Projectile
from game.meteor.update import GROUND, PLAYER, UpdateLoop
from game.meteor.utils import aabb_overlap
from conftest import ground_start_y


class TestMovement:
    """Test per-tick motion and off-screen removal."""

    def test_projectiles_rise_and_hazards_fall(self, store):
        store.projectiles = [Projectile("p-1", 10, 400)]
        store.hazards = [Hazard("h-1", 300, 100)]
        store.player.x = 0

        result = UpdateLoop(store).tick()

        assert not result.terminal
        assert store.projectiles[0].y == 400 - 12
        assert store.hazards[0].y == 100 + 6

    def test_projectile_dropped_once_fully_off_top(self, store):
        store.projectiles = [Projectile("p-1", 10, -12), Projectile("p-2", 30, -13)]

        UpdateLoop(store).tick()

        # -24 is still partially visible, -25 is not
        assert [p.id for p in store.projectiles] == ["p-1"]
        assert store.projectiles[0].y == -24


class TestProjectileHits:
    """Test projectile vs. hazard collisions."""

    def test_overlap_scenario(self):
        assert aabb_overlap(100, 100, 12, 25, 100, 110, 45, 45)

    def test_touching_edges_do_not_overlap(self):
        assert not aabb_overlap(0, 0, 10, 10, 10, 0, 10, 10)

    def test_hit_removes_hazard_and_scores(self, store):
        # After one tick: projectile at (100,100), hazard at (100,110)
        store.projectiles = [Projectile("p-1", 100, 112)]
        store.hazards = [Hazard("h-1", 100, 104)]
        store.player.x = 300

        result = UpdateLoop(store).tick()

        assert result.hits == 1
        assert store.score == 1
        assert store.hazards == []
        assert store.projectiles == []

    def test_projectile_matches_oldest_hazard_only(self, store):
        store.projectiles = [Projectile("p-1", 100, 112)]
        store.hazards = [Hazard("h-1", 95, 104), Hazard("h-2", 90, 100)]
        store.player.x = 300

        result = UpdateLoop(store).tick()

        assert result.hits == 1
        assert [h.id for h in store.hazards] == ["h-2"]
        assert store.projectiles == []

    def test_hazard_matched_once_per_tick(self, store):
        store.projectiles = [Projectile("p-1", 100, 112), Projectile("p-2", 110, 112)]
        store.hazards = [Hazard("h-1", 100, 104)]
        store.player.x = 300

        result = UpdateLoop(store).tick()

        assert result.hits == 1
        assert store.score == 1
        # Second projectile found nothing left to hit and survives
        assert [p.id for p in store.projectiles] == ["p-2"]

    def test_miss_keeps_both(self, store):
        store.projectiles = [Projectile("p-1", 10, 500)]
        store.hazards = [Hazard("h-1", 200, 100)]
        store.player.x = 300

        result = UpdateLoop(store).tick()

        assert result.hits == 0
        assert len(store.projectiles) == 1
        assert len(store.hazards) == 1


class TestTerminalConditions:
    """Test game-over detection."""

    def test_hazard_reaching_ground_ends_game(self, store, config):
        store.player.x = 0
        store.projectiles = [Projectile("p-1", 300, 300)]
        store.hazards = [Hazard("h-1", 300, ground_start_y(config)), Hazard("h-2", 200, 50)]

        result = UpdateLoop(store).tick()

        assert result.terminal
        assert result.reason == GROUND
        assert store.status is GameStatus.TERMINAL
        assert store.projectiles == []
        assert store.hazards == []

    def test_hazard_just_above_ground_does_not_end_game(self, store, config):
        store.player.x = 0
        store.hazards = [Hazard("h-1", 300, ground_start_y(config) - 2)]

        result = UpdateLoop(store).tick()

        assert not result.terminal

    def test_hazard_striking_player_ends_game(self, store, config):
        store.player.x = config.start_player_x
        # Lands at y=710: below the cannon line (745 - 45) but above the ground
        store.hazards = [Hazard("h-1", store.player.x, 704)]

        result = UpdateLoop(store).tick()

        assert result.terminal
        assert result.reason == PLAYER
        assert store.hazards == []

    def test_hazard_beside_player_is_safe(self, store):
        store.player.x = 300
        store.hazards = [Hazard("h-1", 0, 704)]

        result = UpdateLoop(store).tick()

        assert not result.terminal
        assert len(store.hazards) == 1

    def test_ground_check_runs_before_hits(self, store, config):
        # A hazard that is both shot and grounded this tick still ends the game
        y = ground_start_y(config)
        store.player.x = 0
        store.hazards = [Hazard("h-1", 300, y)]
        store.projectiles = [Projectile("p-1", 310, y + 6 + 12 + 10)]

        result = UpdateLoop(store).tick()

        assert result.reason == GROUND
        assert store.score == 0

    def test_hits_on_final_tick_are_not_scored(self, store, config):
        store.player.x = config.start_player_x
        store.projectiles = [Projectile("p-1", 10, 112)]
        store.hazards = [Hazard("h-1", 10, 104), Hazard("h-2", store.player.x, 704)]

        result = UpdateLoop(store).tick()

        assert result.reason == PLAYER
        assert store.score == 0

    def test_terminal_store_is_frozen(self, store):
        store.end()
        store.hazards = []

        result = UpdateLoop(store).tick()

        assert result.terminal
        assert result.reason is None
        assert store.score == 0
