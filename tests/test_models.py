import numpy as np

from orrery.config import settings
from orrery.models.asteroids import asteroid_belt, remove_body, spawn_asteroid
from orrery.models.solar_system import SUN_ID, solar_system
from orrery.physics.body import BodyType
from orrery.simulation.hierarchy import parent_first_order, validate_bodies
from orrery.simulation.stepper import step_simulation


def test_solar_system_is_valid_and_parent_first():
    bodies = solar_system()
    validate_bodies(bodies)
    assert parent_first_order(bodies) == list(range(len(bodies)))
    assert bodies[0].id == SUN_ID
    assert bodies[0].body_type is BodyType.STAR
    assert {b.id for b in bodies} >= {"mercury", "earth", "saturn", "moon"}


def test_solar_system_initial_positions_are_on_orbit():
    bodies = {b.id: b for b in solar_system()}
    earth = bodies["earth"]
    r = np.linalg.norm(earth.position)
    a, e = earth.orbital_elements.semi_major_axis, earth.orbital_elements.eccentricity
    assert a * (1 - e) - 1e-9 <= r <= a * (1 + e) + 1e-9

    moon = bodies["moon"]
    d = np.linalg.norm(moon.position - earth.position)
    assert d <= moon.orbital_elements.semi_major_axis * (1 + moon.orbital_elements.eccentricity) + 1e-9


def test_solar_system_without_moon():
    assert "moon" not in {b.id for b in solar_system(include_moon=False)}


def test_sun_stays_at_origin():
    bodies = solar_system()
    for k in range(3):
        bodies = step_simulation(bodies, float(k))
    np.testing.assert_array_equal(bodies[0].position, [0.0, 0.0, 0.0])


def test_spawn_asteroid_returns_new_collection():
    rng = np.random.default_rng(7)
    bodies = solar_system()
    out = spawn_asteroid(bodies, rng=rng)

    assert len(out) == len(bodies) + 1
    rock = out[-1]
    assert rock.is_free
    assert rock.body_type is BodyType.ASTEROID
    assert settings.SPAWN_MIN_MASS <= rock.mass < settings.SPAWN_MIN_MASS + 1.0
    assert rock.position[1] == 0.0
    assert abs(rock.position[0] - settings.SPAWN_CENTER[0]) <= settings.SPAWN_SPREAD / 2
    assert rock.id not in {b.id for b in bodies}
    assert rock.radius == settings.ASTEROID_RADIUS == 0.5
    assert rock.description == "A newly discovered asteroid drifting through space."


def test_spawned_ids_are_unique():
    rng = np.random.default_rng(1)
    bodies = []
    for _ in range(5):
        bodies = spawn_asteroid(bodies, rng=rng)
    bodies = remove_body(bodies, bodies[1].id)
    bodies = spawn_asteroid(bodies, rng=rng)
    ids = [b.id for b in bodies]
    assert len(ids) == len(set(ids))


def test_asteroid_belt_elements_within_limits():
    belt = asteroid_belt(50, parent_id=SUN_ID, rng=np.random.default_rng(3))
    assert len(belt) == 50
    for rock in belt:
        el = rock.orbital_elements
        assert rock.is_keplerian
        assert settings.BELT_INNER_RADIUS <= el.semi_major_axis <= settings.BELT_OUTER_RADIUS
        assert 0.0 <= el.eccentricity <= settings.BELT_MAX_ECCENTRICITY


def test_remove_body_leaves_orphans_orbiting_origin():
    bodies = solar_system()
    out = remove_body(bodies, "earth")
    assert "earth" not in {b.id for b in out}
    assert len(bodies) == len(out) + 1

    stepped = step_simulation(out, 1.0)
    moon = next(b for b in stepped if b.id == "moon")
    assert np.linalg.norm(moon.position) <= 2.5 * 1.1
