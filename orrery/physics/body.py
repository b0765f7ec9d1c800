# orrery/physics/body.py
from enum import Enum
from typing import Optional

import numpy as np

from orrery.physics.orbit import OrbitalElements


class BodyType(Enum):
    STAR = "STAR"
    PLANET = "PLANET"
    MOON = "MOON"
    DWARF_PLANET = "DWARF_PLANET"
    ASTEROID = "ASTEROID"
    CUSTOM = "CUSTOM"


class CelestialBody:
    """
    Simulation entity.

    is_locked selects the motion model: locked bodies follow their orbital elements
    around parent_id (or the origin with the default central mass when there is no
    parent), free bodies are integrated under pairwise gravity. Position/velocity are
    authoritative for free bodies and overwritten each step for locked ones.
    """
    def __init__(self, id, name=None, mass=1.0, radius=1.0, position=(0.0, 0.0, 0.0),
                 velocity=(0.0, 0.0, 0.0), is_locked=False,
                 orbital_elements: Optional[OrbitalElements] = None, parent_id: Optional[str] = None,
                 body_type=BodyType.CUSTOM, color="#FFFFFF", description=""):
        self.id = str(id)
        self.name = name if name is not None else self.id
        self.mass = float(mass)
        self.radius = float(radius)
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        if self.position.shape != (3,) or self.velocity.shape != (3,):
            raise ValueError("Position and velocity must be 3D vectors.")
        self.is_locked = bool(is_locked)
        self.orbital_elements = orbital_elements
        self.parent_id = parent_id
        self.body_type = BodyType(body_type)
        self.color = color
        self.description = description

    @property
    def is_free(self) -> bool:
        return not self.is_locked

    @property
    def is_keplerian(self) -> bool:
        """Locked and carrying elements, i.e. moved by the Keplerian pass."""
        return self.is_locked and self.orbital_elements is not None

    def copy(self):
        return CelestialBody(
            id=self.id,
            name=self.name,
            mass=self.mass,
            radius=self.radius,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            is_locked=self.is_locked,
            orbital_elements=self.orbital_elements,
            parent_id=self.parent_id,
            body_type=self.body_type,
            color=self.color,
            description=self.description,
        )

    def to_dict(self):
        elements = self.orbital_elements
        return {
            "id": self.id,
            "name": self.name,
            "type": self.body_type.value,
            "mass": self.mass,
            "radius": self.radius,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "is_locked": self.is_locked,
            "parent_id": self.parent_id,
            "orbital_elements": None if elements is None else {
                "semi_major_axis": elements.semi_major_axis,
                "eccentricity": elements.eccentricity,
                "inclination": elements.inclination,
                "ascending_node": elements.ascending_node,
                "periapsis": elements.periapsis,
                "mean_anomaly_epoch": elements.mean_anomaly_epoch,
            },
        }

    def __repr__(self):
        model = "locked" if self.is_locked else "free"
        return f"{self.name} ({model}) at pos {self.position}, vel {self.velocity}"
