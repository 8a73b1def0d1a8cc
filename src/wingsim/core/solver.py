"""
Time-integration strategies.

Every strategy integrates y' = f(t, y) over [t0, tf] and reports accepted
points through an output callback:

    integrate(derivative_fn, output_fn, t0, tf, y0) -> (t_array, y_array)

- FixedStepExplicit: forward Euler with constant dt, epsilon-guarded end
- AdaptiveNonStiff: scipy RK45 (Dormand-Prince 5(4))
- AdaptiveStiff: scipy BDF (implicit, variable order 1-5)

The derivative function may be evaluated any number of times per accepted
step; only ``output_fn`` sees accepted points, exactly once each.
"""
from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import BDF, LSODA, RK45, Radau

from wingsim.utils.validation import validate_non_negative, validate_timestep

Array = NDArray[np.float64]
DerivativeFn = Callable[[float, Array], Array]
OutputFn = Callable[[float, Array], None]
StepHook = Callable[[float, Array], None]


class SolverType(IntEnum):
    FIXED_STEP = 0
    ADAPTIVE_NONSTIFF = 1
    ADAPTIVE_STIFF = 2


class UnsupportedSolverError(ValueError):
    """Raised for a solver_type that names no integration strategy."""


class IntegrationError(RuntimeError):
    """Raised when an adaptive integrator fails to take a step."""


class IntegrationStrategy:
    """Base class for integration strategies."""

    name = "base"
    adaptive = False

    def integrate(
        self,
        derivative_fn: DerivativeFn,
        output_fn: OutputFn,
        t0: float,
        tf: float,
        y0: Array,
    ) -> tuple[Array, Array]:
        raise NotImplementedError


class FixedStepExplicit(IntegrationStrategy):
    """
    Explicit forward-Euler integration with a constant time step.

    Parameters
    ----------
    dt : float
        Time step [s]
    t_eps : float
        End-of-run tolerance: the loop runs while ``tf - t > t_eps``
    step_hook : Callable | None
        Called as ``step_hook(t, y)`` after each update (visualization)

    Notes
    -----
    Each iteration:
    1. output_fn(t, y) records the pre-step frame
    2. d = derivative_fn(t, y)
    3. y <- y + dt * d
    4. step_hook(t, y)
    5. t <- t + dt

    The terminal state is passed to ``on_finish`` (if given) after the loop.
    """

    name = "fixed-step explicit"

    def __init__(
        self,
        dt: float,
        t_eps: float = 1e-9,
        step_hook: StepHook | None = None,
        on_finish: OutputFn | None = None,
    ) -> None:
        validate_timestep(dt)
        validate_non_negative(t_eps, "t_eps")
        self.dt = float(dt)
        self.t_eps = float(t_eps)
        self.step_hook = step_hook
        self.on_finish = on_finish
        self.num_steps = 0

    def step(self, derivative_fn: DerivativeFn, t: float, y: Array) -> Array:
        """One explicit update: y + dt * f(t, y)."""
        return y + self.dt * derivative_fn(t, y)

    def integrate(self, derivative_fn, output_fn, t0, tf, y0):
        t = float(t0)
        y = np.array(y0, dtype=np.float64)
        ts = []
        ys = []
        self.num_steps = 0

        while tf - t > self.t_eps:
            output_fn(t, y)
            ts.append(t)
            ys.append(y)

            y = self.step(derivative_fn, t, y)
            if self.step_hook is not None:
                self.step_hook(t, y)

            t = t + self.dt
            self.num_steps += 1

        if self.on_finish is not None:
            self.on_finish(t, y)
        ts.append(t)
        ys.append(y)
        return np.array(ts), np.array(ys)


class _AdaptiveStrategy(IntegrationStrategy):
    """Step-wise driver around a scipy OdeSolver class."""

    adaptive = True
    method_map: dict[str, type] = {}

    def __init__(
        self,
        method: str,
        rtol: float = 1e-6,
        atol: float = 1e-8,
        max_step: float = np.inf,
    ) -> None:
        if method not in self.method_map:
            raise ValueError(
                f"Method must be one of {sorted(self.method_map)}, got '{method}'"
            )
        self.method = method
        self.rtol = float(rtol)
        self.atol = float(atol)
        self.max_step = max_step
        self.num_steps = 0

    def integrate(self, derivative_fn, output_fn, t0, tf, y0):
        solver_cls = self.method_map[self.method]
        solver = solver_cls(
            derivative_fn,
            float(t0),
            np.array(y0, dtype=np.float64),
            float(tf),
            rtol=self.rtol,
            atol=self.atol,
            max_step=self.max_step,
        )

        ts = [solver.t]
        ys = [solver.y.copy()]
        output_fn(solver.t, solver.y.copy())
        self.num_steps = 0

        while solver.status == "running":
            message = solver.step()
            if solver.status == "failed":
                raise IntegrationError(
                    f"{self.method} failed at t={solver.t:.6f}s: {message}"
                )
            self.num_steps += 1
            ts.append(solver.t)
            ys.append(solver.y.copy())
            output_fn(solver.t, solver.y.copy())

        return np.array(ts), np.array(ys)


class AdaptiveNonStiff(_AdaptiveStrategy):
    """Variable-step explicit Runge-Kutta (Dormand-Prince 5(4))."""

    name = "adaptive non-stiff"
    method_map = {"RK45": RK45}

    def __init__(self, rtol: float = 1e-6, atol: float = 1e-8, max_step: float = np.inf) -> None:
        super().__init__("RK45", rtol, atol, max_step)


class AdaptiveStiff(_AdaptiveStrategy):
    """
    Variable-step implicit integrator for stiff dynamics.

    Parameters
    ----------
    method : str
        "BDF" (default, variable order 1-5), "Radau" or "LSODA"
    """

    name = "adaptive stiff"
    method_map = {"BDF": BDF, "Radau": Radau, "LSODA": LSODA}

    def __init__(
        self,
        method: str = "BDF",
        rtol: float = 1e-6,
        atol: float = 1e-8,
        max_step: float = np.inf,
    ) -> None:
        super().__init__(method, rtol, atol, max_step)


def check_solver_type(solver_type) -> SolverType:
    """
    Convert a configured solver_type to SolverType.

    Raises
    ------
    UnsupportedSolverError
        If the value names no strategy
    """
    try:
        return SolverType(solver_type)
    except ValueError:
        raise UnsupportedSolverError(f"Unsupported solver_type={solver_type} specified") from None
