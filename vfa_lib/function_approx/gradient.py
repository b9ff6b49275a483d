"""
Weight gradients of linear function approximations.

This module provides the sparse gradient of a prediction with respect to
the weights that produced it.
"""

from collections.abc import Mapping
from typing import Dict, Iterator, List, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from vfa_lib.function_approx.base import ApproximationResult


class WeightGradient(Mapping):
    """
    Sparse mapping from feature ids to partial derivatives.

    Ids that are not in the gradient have a partial derivative of zero.
    Compares equal to any mapping with the same items, including a dict.
    """

    def __init__(self):
        self.gradient: Dict[int, float] = {}

    def put(self, weight_id: int, d: float) -> None:
        """
        Set the partial derivative for a weight, replacing any previous value.

        Args:
            weight_id: Feature identifier of the weight
            d: Partial derivative of the prediction with respect to the weight
        """
        self.gradient[weight_id] = d

    def partial_derivative(self, weight_id: int) -> float:
        """
        Return the partial derivative for a weight.

        Args:
            weight_id: Feature identifier of the weight

        Returns:
            The stored partial derivative, or 0.0 if absent
        """
        return self.gradient.get(weight_id, 0.0)

    def non_zero_partial_derivatives(self) -> List[Tuple[int, float]]:
        """
        Return the (weight id, derivative) pairs with a non-zero derivative.

        Returns:
            List of pairs in insertion order
        """
        return [(wid, d) for wid, d in self.gradient.items() if d != 0.0]

    def as_array(self, size: int) -> np.ndarray:
        """
        Return the gradient as a dense vector indexed by feature id.

        Args:
            size: Length of the vector, usually the declared feature count

        Returns:
            Array of partial derivatives, zero where absent

        Raises:
            ValueError: If a feature id falls outside [0, size)
        """
        dense = np.zeros(size)
        for wid, d in self.gradient.items():
            if not 0 <= wid < size:
                raise ValueError(f"Feature id {wid} outside gradient of size {size}")
            dense[wid] = d
        return dense

    def __getitem__(self, weight_id: int) -> float:
        return self.gradient[weight_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self.gradient)

    def __len__(self) -> int:
        return len(self.gradient)

    def __repr__(self) -> str:
        return f"WeightGradient({self.gradient})"


def linear_weight_gradient(approximation_result: 'ApproximationResult') -> WeightGradient:
    """
    Compute the weight gradient of a linear prediction.

    The derivative of sum(w_i * x_i) with respect to w_i is x_i, so the
    gradient is read directly from the features of the result. Repeated
    feature ids keep the activation of their last occurrence.

    Args:
        approximation_result: Result of a previous prediction

    Returns:
        Gradient with one entry per distinct active feature
    """
    gradient = WeightGradient()
    for sf in approximation_result.state_features:
        gradient.put(sf.feature_id, sf.value)
    return gradient
