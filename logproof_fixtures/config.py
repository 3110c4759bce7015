"""
Problem-construction configuration, loaded from YAML.

Example (configs/bfv_1024.yaml):

    name: bfv_1024
    poly_modulus_degree: 1024
    coeff_modulus: [132120577]
    plain_modulus: 12289
    ring: ristretto
    delta_limbs: 1
"""

import hashlib
import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from .backend import Modulus, moduli
from .rings import RISTRETTO, Ring

RING_CHOICES = ("ristretto", "coeff_modulus")


@dataclass
class ProblemConfig:
    """Parameters shared by every problem built from one backend setup."""
    name: str = "bfv_1024"
    poly_modulus_degree: int = 1024
    coeff_modulus: List[int] = field(default_factory=lambda: [132120577])
    plain_modulus: int = 12289
    ring: str = "ristretto"         # target ring for converted polynomials
    delta_limbs: int = 1            # limb width of Delta = floor(q/t)
    strict: bool = True             # check caller preconditions
    log_dir: Optional[str] = None   # JSONL logs go here when set

    def __post_init__(self):
        if self.ring not in RING_CHOICES:
            raise ValueError(f"Unknown ring '{self.ring}'. Choose from {RING_CHOICES}")
        if self.poly_modulus_degree < 1:
            raise ValueError("poly_modulus_degree must be positive")
        if not self.coeff_modulus:
            raise ValueError("coeff_modulus must list at least one modulus")
        self.coeff_modulus = [int(m) for m in self.coeff_modulus]

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ProblemConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**d)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def config_hash(self) -> str:
        """Deterministic hash of the config."""
        s = json.dumps(self.to_dict(), sort_keys=True, default=str)
        return hashlib.sha256(s.encode()).hexdigest()[:16]

    def moduli(self) -> List[Modulus]:
        return moduli(self.coeff_modulus)

    def q(self) -> int:
        """Ciphertext modulus, the product of the modulus chain."""
        Q = 1
        for m in self.coeff_modulus:
            Q *= m
        return Q

    def target_ring(self) -> Ring:
        if self.ring == "ristretto":
            return RISTRETTO
        return Ring.from_coeff_modulus(self.coeff_modulus, name=f"{self.name}_q")


def load_config(config_path: str) -> ProblemConfig:
    with open(config_path, 'r') as f:
        return ProblemConfig.from_dict(yaml.safe_load(f) or {})
