"""
Function approximation module for VFA library.

This module provides value function approximation: linear prediction over
sparse features, lazily created weights and weight gradients for use by
external learning algorithms.
"""

from vfa_lib.function_approx.base import (
    ValueFunctionApproximation,
    ApproximationResult,
    ActionApproximationResult
)
from vfa_lib.function_approx.gradient import WeightGradient, linear_weight_gradient
from vfa_lib.function_approx.weights import FunctionWeight, WeightStore
from vfa_lib.function_approx.linear import LinearVFA

__all__ = [
    'ValueFunctionApproximation',
    'ApproximationResult',
    'ActionApproximationResult',
    'WeightGradient',
    'linear_weight_gradient',
    'FunctionWeight',
    'WeightStore',
    'LinearVFA'
]
