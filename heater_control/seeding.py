"""Global seeding utilities."""
from __future__ import annotations

import os
import random

import numpy as np


def set_global_seed(seed: int) -> None:
    random.seed(seed)
    np.random.seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)


def make_rng(seed: int) -> np.random.Generator:
    return np.random.default_rng(seed)
