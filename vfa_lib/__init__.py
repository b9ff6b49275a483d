"""
Value Function Approximation Library.

This library provides linear value function approximation for reinforcement
learning agents: sparse feature databases, lazily created weights, linear
prediction and the weight gradients learning rules need.
"""

__version__ = '0.1.0'

# Import submodules to make them available through the package
from vfa_lib import features
from vfa_lib import function_approx
from vfa_lib import logging

__all__ = [
    'features',
    'function_approx',
    'logging'
]
