"""
Base classes for value function approximation.

This module provides the abstract interface of value function approximators
and the results they return, which record the features and weights that
produced each prediction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar, Generic, List, Optional, Sequence, Tuple

from vfa_lib.features.base import StateFeature
from vfa_lib.function_approx.gradient import WeightGradient
from vfa_lib.function_approx.weights import FunctionWeight

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')
V = TypeVar('V', bound='ValueFunctionApproximation')


@dataclass(frozen=True)
class ApproximationResult:
    """
    Snapshot of one prediction.

    The weights are the live objects owned by the approximator's weight
    store, index-aligned with the features. The predicted value is fixed at
    prediction time and does not follow later weight changes.
    """

    predicted_value: float
    """The predicted value"""

    state_features: Tuple[StateFeature, ...]
    """Features that were active in the prediction"""

    function_weights: Tuple[FunctionWeight, ...]
    """Weights used for each feature, in feature order"""


@dataclass(frozen=True)
class ActionApproximationResult(Generic[A]):
    """
    The prediction for one candidate action of a state-action query.
    """

    query_action: A
    """The action the prediction is for"""

    approximation_result: ApproximationResult
    """The prediction for the state paired with the action"""

    @staticmethod
    def extract_approximation_for_action(
        results: Sequence['ActionApproximationResult[A]'],
        action: A
    ) -> Optional[ApproximationResult]:
        """
        Find the prediction for an action in a list of results.

        Args:
            results: Results of a state-action query
            action: The action to look for

        Returns:
            The first matching ApproximationResult, or None if absent
        """
        for aar in results:
            if aar.query_action == action:
                return aar.approximation_result
        return None


class ValueFunctionApproximation(ABC, Generic[S, A]):
    """
    Interface for value function approximations.

    A value function approximation predicts the value of states or
    state-action pairs, exposes the gradient of a prediction with respect to
    its weights, and lets an external learner overwrite individual weights.
    """

    @abstractmethod
    def get_state_value(self, state: S) -> ApproximationResult:
        """
        Predict the value of a state.

        Args:
            state: The state to evaluate

        Returns:
            ApproximationResult of the prediction
        """
        pass

    @abstractmethod
    def get_state_action_values(
        self,
        state: S,
        actions: Sequence[A]
    ) -> List[ActionApproximationResult[A]]:
        """
        Predict the value of a state paired with each candidate action.

        Args:
            state: The state to evaluate
            actions: Candidate actions

        Returns:
            One ActionApproximationResult per action, in the order given
        """
        pass

    @abstractmethod
    def get_weight_gradient(self, approximation_result: ApproximationResult) -> WeightGradient:
        """
        Compute the gradient of a prediction with respect to its weights.

        Args:
            approximation_result: Result of a previous prediction

        Returns:
            Gradient keyed by feature id
        """
        pass

    @abstractmethod
    def reset_weights(self) -> None:
        """Discard all learned weights."""
        pass

    @abstractmethod
    def set_weight(self, feature_id: int, w: float) -> None:
        """
        Set the weight of a feature.

        Args:
            feature_id: Feature identifier
            w: New weight value
        """
        pass

    @abstractmethod
    def num_features(self) -> int:
        """
        Return the number of features declared by the feature database.

        Returns:
            Declared feature count, or 0 if unknown in advance
        """
        pass

    @abstractmethod
    def get_function_weight(self, feature_id: int) -> Optional[FunctionWeight]:
        """
        Look up the weight of a feature without creating it.

        Args:
            feature_id: Feature identifier

        Returns:
            The weight, or None if the feature has never been seen
        """
        pass

    @abstractmethod
    def copy(self: V) -> V:
        """
        Return an independent deep copy of this approximation.

        Returns:
            New approximation sharing no mutable state with this one
        """
        pass
