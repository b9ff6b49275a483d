"""
Linear value function approximation.

This module provides a general purpose linear approximator: the value of a
state (or state-action pair) is the linear combination of the activated
features reported by a feature database and one learned weight per feature.
"""

from typing import TypeVar, Iterable, List, Optional, Sequence

from vfa_lib.features.base import FeatureDatabase, StateFeature
from vfa_lib.function_approx.base import (
    ValueFunctionApproximation,
    ApproximationResult,
    ActionApproximationResult
)
from vfa_lib.function_approx.gradient import WeightGradient, linear_weight_gradient
from vfa_lib.function_approx.weights import FunctionWeight, WeightStore
from vfa_lib.logging import get_logger, log_weights_summary

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')


class LinearVFA(ValueFunctionApproximation[S, A]):
    """
    Linear value function approximation over a feature database.

    A weight is created automatically, with the default weight value, for
    every feature the database returns. The same FunctionWeight instance is
    used for a feature id across calls, so the weights recorded in an
    ApproximationResult are the ones stored by this approximator.

    Not thread-safe: callers sharing an instance between threads must
    serialize access.
    """

    def __init__(self, feature_database: FeatureDatabase[S, A], default_weight: float = 0.0):
        """
        Initialize the approximator.

        Args:
            feature_database: Feature database used to extract features
            default_weight: Initial value of weights created on demand
        """
        self.feature_database = feature_database
        self.default_weight = default_weight
        self.weights = WeightStore(default_weight, feature_database)

    def get_state_value(self, state: S) -> ApproximationResult:
        """
        Predict the value of a state.

        Args:
            state: The state to evaluate

        Returns:
            ApproximationResult of the prediction
        """
        features = self.feature_database.get_state_features(state)
        return self.get_approximation_result_from(features)

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
        feature_sets = self.feature_database.get_action_features_sets(state, actions)
        return [
            ActionApproximationResult(afq.query_action, self.get_approximation_result_from(afq.features))
            for afq in feature_sets
        ]

    def get_weight_gradient(self, approximation_result: ApproximationResult) -> WeightGradient:
        """
        Compute the gradient of a prediction with respect to its weights.

        Args:
            approximation_result: Result of a previous prediction

        Returns:
            Gradient mapping each active feature id to its activation
        """
        return linear_weight_gradient(approximation_result)

    def get_approximation_result_from(self, features: Iterable[StateFeature]) -> ApproximationResult:
        """
        Compute the linear function over the given features and the stored weights.

        Repeated feature ids are each added to the sum with their own
        activation; they share the same weight.

        Args:
            features: Activated features to combine; any iterable, read once

        Returns:
            ApproximationResult holding the value, features and weights used
        """
        features = tuple(features)
        active_weights = []
        predicted_value = 0.
        for sf in features:
            fw = self.weights.get_or_create(sf.feature_id)
            predicted_value += sf.value * fw.weight_value
            active_weights.append(fw)

        return ApproximationResult(predicted_value, features, tuple(active_weights))

    def reset_weights(self) -> None:
        """Discard all weights; later predictions recreate them at the default weight."""
        logger = get_logger()
        log_weights_summary(self.weights, "reset_weights")
        logger.debug({
            "event": "weights_reset",
            "num_weights": len(self.weights)
        })
        self.weights.reset()

    def set_weight(self, feature_id: int, w: float) -> None:
        """
        Set the weight of a feature, creating it if it does not exist.

        Args:
            feature_id: Feature identifier
            w: New weight value
        """
        self.weights.set(feature_id, w)

    def num_features(self) -> int:
        """
        Return the number of features declared by the feature database.

        Returns:
            Declared feature count, or 0 if features are generated on demand
        """
        return self.weights.count_declared_features()

    def get_function_weight(self, feature_id: int) -> Optional[FunctionWeight]:
        """
        Look up the weight of a feature without creating it.

        Args:
            feature_id: Feature identifier

        Returns:
            The stored weight, or None if the feature has never been seen
        """
        return self.weights.get(feature_id)

    def copy(self) -> 'LinearVFA[S, A]':
        """
        Return a deep copy of this approximator.

        The copy gets its own copy of the feature database and new
        FunctionWeight objects, so weight changes in either approximator never
        affect the other.

        Returns:
            Independent LinearVFA with the same weights and default weight
        """
        vfa = LinearVFA(self.feature_database.copy(), self.default_weight)
        vfa.weights = self.weights.copy(vfa.feature_database)

        get_logger().debug({
            "event": "vfa_copied",
            "num_weights": len(vfa.weights),
            "default_weight": self.default_weight
        })
        return vfa

    def __repr__(self) -> str:
        return (f"LinearVFA(feature_database={self.feature_database!r}, "
                f"default_weight={self.default_weight}, num_weights={len(self.weights)})")
