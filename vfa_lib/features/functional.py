"""
Feature database built from feature functions.

This module provides a feature database that extracts a fixed set of raw
features from a state by applying a sequence of feature functions, in the
same way the function approximators consume `feature_functions`.
"""

from typing import Callable, List, Optional, Sequence, TypeVar

from vfa_lib.features.base import FeatureDatabase, StateFeature, ActionFeaturesQuery

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')


class FunctionFeatureDatabase(FeatureDatabase[S, A]):
    """
    Feature database over a fixed list of feature functions.

    Feature i of a state is `feature_functions[i](state)` and has identifier i.
    When candidate actions are configured, the features of the state paired
    with the k-th action are the same values shifted into their own block of
    identifiers, `(k + 1) * n + i`, after the block of state features, so
    state values and each action have their own sets of weights.
    """

    def __init__(
        self,
        feature_functions: Sequence[Callable[[S], float]],
        actions: Optional[Sequence[A]] = None
    ):
        """
        Initialize the feature database.

        Args:
            feature_functions: Functions mapping a state to a feature value
            actions: Optional list of all actions that may be queried

        Raises:
            ValueError: If no feature functions are given or actions repeat
        """
        self.feature_functions = list(feature_functions)
        if not self.feature_functions:
            raise ValueError("Feature functions list cannot be empty")

        self.actions = list(actions) if actions is not None else []
        if len(set(self.actions)) != len(self.actions):
            raise ValueError("Actions list cannot contain duplicates")

    def number_of_features(self) -> int:
        """
        Return the declared number of features.

        Returns:
            n for state features, plus n for each configured action
        """
        n = len(self.feature_functions)
        if self.actions:
            return n * (len(self.actions) + 1)
        return n

    def get_feature_values(self, state: S) -> List[float]:
        """
        Apply every feature function to a state.

        Args:
            state: The state to extract features from

        Returns:
            Feature values in feature-function order
        """
        return [float(f(state)) for f in self.feature_functions]

    def get_state_features(self, state: S) -> List[StateFeature]:
        return [
            StateFeature(i, v)
            for i, v in enumerate(self.get_feature_values(state))
        ]

    def get_action_features_sets(
        self,
        state: S,
        actions: Sequence[A]
    ) -> List[ActionFeaturesQuery[A]]:
        """
        Return the features of the state paired with each action.

        Args:
            state: The state to extract features from
            actions: Candidate actions, each one of the configured actions

        Returns:
            One ActionFeaturesQuery per action, in the order given

        Raises:
            ValueError: If an action was not configured
        """
        values = self.get_feature_values(state)
        n = len(values)

        queries = []
        for action in actions:
            if action not in self.actions:
                raise ValueError(f"Unknown action: {action!r}")
            offset = (self.actions.index(action) + 1) * n
            queries.append(ActionFeaturesQuery(
                action,
                [StateFeature(offset + i, v) for i, v in enumerate(values)]
            ))
        return queries

    def copy(self) -> 'FunctionFeatureDatabase[S, A]':
        # feature functions are stateless and can be shared
        return FunctionFeatureDatabase(self.feature_functions, self.actions or None)

    def __repr__(self) -> str:
        return (f"FunctionFeatureDatabase(num_functions={len(self.feature_functions)}, "
                f"actions={self.actions})")
