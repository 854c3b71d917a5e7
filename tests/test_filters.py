"""
test_filters.py — Reconstruction Filter Tests
=============================================

Verifies:
  - Mitchell polynomial is continuous at d = 1 and vanishes at d = 2
  - Gaussian is exactly zero at and beyond its radius
  - Weights depend on |offset| only
  - make_filter name handling, sampling modes are not kernels
"""

import math

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cube2oct.filters import (
    Filter, evaluate, filter_radius, gaussian, make_filter, mitchell,
    mitchell_inner, mitchell_outer,
)


class TestMitchell:

    @pytest.mark.parametrize("b,c", [
        (1 / 3, 1 / 3), (0.0, 0.5), (0.0, 1.0), (1.0, 0.0), (0.7, -0.3),
    ])
    def test_continuous_at_one(self, b, c):
        inner = mitchell_inner(1.0, b, c)
        outer = mitchell_outer(1.0, b, c)
        assert abs(inner - outer) < 1e-14, f"B={b} C={c}: {inner} vs {outer}"

    @pytest.mark.parametrize("b,c", [(1 / 3, 1 / 3), (0.0, 0.5)])
    def test_zero_at_two(self, b, c):
        assert abs(mitchell_outer(2.0, b, c)) < 1e-14

    def test_defaults(self):
        f = mitchell()
        assert f.kind == 'mitchell'
        assert filter_radius(f) == 2.0
        assert f.coeffs == pytest.approx((1 / 3, 1 / 3))

    def test_center_weight(self):
        """At d = 0 the weight is (6 - 2B) / 6."""
        w = evaluate(mitchell(), jnp.zeros(2))
        assert float(w) == pytest.approx((6 - 2 / 3) / 6)

    def test_outside_support(self):
        w = evaluate(mitchell(), jnp.array([[2.0, 0.0], [1.5, 1.5], [0.0, -3.0]]))
        assert np.all(np.asarray(w) == 0.0)

    def test_radial(self):
        f = mitchell()
        a = evaluate(f, jnp.array([0.6, 0.8]))
        b = evaluate(f, jnp.array([-1.0, 0.0]))
        assert float(a) == pytest.approx(float(b), abs=1e-14)


class TestGaussian:

    @pytest.mark.parametrize("sigma,radius", [(2 / 3, 2.0), (0.5, 1.5), (1.0, 3.0)])
    def test_zero_at_radius(self, sigma, radius):
        f = gaussian(sigma, radius)
        for offset in ([radius, 0.0], [0.0, -radius], [-radius, 0.0]):
            assert float(evaluate(f, jnp.array(offset))) == 0.0

    def test_zero_beyond_radius(self):
        w = evaluate(gaussian(), jnp.array([[2.5, 0.0], [1.5, 1.5]]))
        assert np.all(np.asarray(w) == 0.0)

    def test_center_value(self):
        sigma, radius = 2 / 3, 2.0
        a = 1.0 / (math.sqrt(2 * math.pi) * sigma)
        expected = a - a * math.exp(-radius**2 / (2 * sigma**2))
        assert float(evaluate(gaussian(sigma, radius), jnp.zeros(2))) == pytest.approx(expected)

    def test_positive_inside(self):
        d = jnp.linspace(0.0, 1.99, 50)
        w = evaluate(gaussian(), jnp.stack([d, jnp.zeros_like(d)], axis=-1))
        assert float(jnp.min(w)) > 0.0

    def test_monotone(self):
        d = jnp.linspace(0.0, 1.99, 50)
        w = evaluate(gaussian(), jnp.stack([d, jnp.zeros_like(d)], axis=-1))
        assert bool(jnp.all(jnp.diff(w) < 0))


class TestMakeFilter:

    @pytest.mark.parametrize("name", ['nearest', 'bilinear', 'gaussian', 'mitchell'])
    def test_known(self, name):
        assert make_filter(name).kind == name

    def test_case_insensitive(self):
        assert make_filter('Mitchell') == mitchell()

    def test_unknown(self):
        with pytest.raises(ValueError, match="unknown resampling method"):
            make_filter('lanczos')

    @pytest.mark.parametrize("name", ['nearest', 'bilinear'])
    def test_modes_are_not_kernels(self, name):
        f = make_filter(name)
        assert not f.windowed
        with pytest.raises(ValueError):
            evaluate(f, jnp.zeros(2))
        with pytest.raises(ValueError):
            filter_radius(f)

    def test_filters_are_values(self):
        """Filters compare by value and are immutable."""
        assert gaussian(0.5, 1.5) == gaussian(0.5, 1.5)
        f = Filter('mitchell', 2.0, (0.0, 0.5))
        with pytest.raises(AttributeError):
            f.radius = 3.0
