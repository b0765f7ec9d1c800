# orrery/models/solar_system.py
import math

from orrery.config import settings
from orrery.physics.body import BodyType, CelestialBody
from orrery.physics.orbit import OrbitalElements
from orrery.simulation.stepper import place_locked_bodies

SUN_ID = "sun"

# id, name, mass, radius, color, a, e, i (deg), node (deg), periapsis (deg), M0 (deg)
_PLANETS = [
    ("mercury", "Mercury", 1.0, 0.8, "#A5A5A5", 10.0, 0.206, 7.0, 48.3, 29.1, 174.8),
    ("venus", "Venus", 2.0, 1.2, "#E3BB76", 15.0, 0.007, 3.4, 76.7, 54.9, 50.1),
    ("earth", "Earth", 2.5, 1.3, "#22A6B3", 20.0, 0.017, 0.0, 0.0, 114.2, 358.6),
    ("mars", "Mars", 1.5, 1.0, "#EB4D4B", 26.0, 0.093, 1.85, 49.6, 286.5, 19.4),
    ("jupiter", "Jupiter", 80.0, 3.5, "#D35400", 40.0, 0.049, 1.3, 100.5, 273.9, 20.0),
    ("saturn", "Saturn", 60.0, 3.0, "#F1C40F", 55.0, 0.057, 2.5, 113.7, 339.4, 317.0),
]

_DESCRIPTIONS = {
    "sun": "The star at the center of the Solar System, a nearly perfect sphere of hot plasma.",
    "mercury": "The smallest planet and the closest to the Sun, rocky with no substantial atmosphere.",
    "venus": "Second planet from the Sun, wrapped in a thick carbon dioxide atmosphere.",
    "earth": "Third planet from the Sun and the only known place inhabited by living things.",
    "mars": "Fourth planet from the Sun, the Red Planet, home of the largest volcano in the system.",
    "jupiter": "The largest planet, a gas giant more massive than all other planets combined.",
    "saturn": "Sixth planet from the Sun, best known for its ring system.",
    "moon": "Earth's only natural satellite.",
}


def _elements(a, e, inc, node, peri, m0):
    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination=math.radians(inc),
        ascending_node=math.radians(node),
        periapsis=math.radians(peri),
        mean_anomaly_epoch=math.radians(m0),
    )


def solar_system(include_moon=True):
    """
    Scaled-down Solar System: a static star at the origin, six planets on Kepler
    rails around it and (optionally) a moon around Earth. Listed parent-first with
    positions initialized to t = 0.
    """
    bodies = [
        CelestialBody(
            id=SUN_ID,
            name="Sun",
            mass=settings.DEFAULT_CENTRAL_MASS,
            radius=4.0,
            is_locked=True,
            body_type=BodyType.STAR,
            color="#FDB813",
            description=_DESCRIPTIONS[SUN_ID],
        )
    ]

    for pid, name, mass, radius, color, a, e, inc, node, peri, m0 in _PLANETS:
        bodies.append(CelestialBody(
            id=pid,
            name=name,
            mass=mass,
            radius=radius,
            is_locked=True,
            orbital_elements=_elements(a, e, inc, node, peri, m0),
            parent_id=SUN_ID,
            body_type=BodyType.PLANET,
            color=color,
            description=_DESCRIPTIONS[pid],
        ))

    if include_moon:
        bodies.append(CelestialBody(
            id="moon",
            name="Moon",
            mass=0.1,
            radius=0.35,
            is_locked=True,
            orbital_elements=_elements(2.5, 0.055, 5.1, 125.0, 318.0, 135.0),
            parent_id="earth",
            body_type=BodyType.MOON,
            color="#C8C8C8",
            description=_DESCRIPTIONS["moon"],
        ))

    return place_locked_bodies(bodies, 0.0)
