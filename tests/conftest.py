"""
conftest.py — Shared pytest fixtures for the cube2oct test suite
"""

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


def pytest_addoption(parser):
    parser.addoption("--runslow", action="store_true", default=False,
                     help="also run tests marked slow (N = 64 round trips)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip = pytest.mark.skip(reason="slow; pass --runslow")
    for item in items:
        if item.get_closest_marker("slow"):
            item.add_marker(skip)


# One distinct color per face, in face order
FACE_COLORS = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, 1.0],
    [1.0, 0.5, 0.5],
    [0.5, 1.0, 0.5],
    [0.5, 0.5, 1.0],
])


@pytest.fixture(params=[4, 8])
def N(request):
    """Face resolution."""
    return request.param


@pytest.fixture
def face_colors():
    return jnp.asarray(FACE_COLORS)


@pytest.fixture
def colored_faces():
    """Factory: (6, n, n, 3) cubemap with each face a constant FACE_COLORS entry."""
    def _make(n):
        return jnp.broadcast_to(jnp.asarray(FACE_COLORS)[:, None, None, :], (6, n, n, 3))
    return _make


@pytest.fixture
def random_directions():
    """Factory: random unit directions away from cube edges and the octahedral fold."""
    def _make(count=500, seed=0):
        key = jax.random.PRNGKey(seed)
        v = jax.random.normal(key, (count * 2, 3))
        v = v / jnp.linalg.norm(v, axis=-1, keepdims=True)
        a = jnp.sort(jnp.abs(v), axis=-1)
        keep = (a[:, 2] - a[:, 1] > 1e-3) & (jnp.abs(v[:, 2]) > 1e-3) & (a[:, 0] > 1e-3)
        return v[keep][:count]
    return _make
