"""
Base classes for feature databases.

A feature database turns states, or states paired with candidate actions,
into sparse lists of activated features. Value function approximators only
depend on this interface, never on a concrete feature generation scheme.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TypeVar, Generic, List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from vfa_lib.function_approx.linear import LinearVFA

# Type variables for state and action
S = TypeVar('S')
A = TypeVar('A')


@dataclass(frozen=True)
class StateFeature:
    """
    A single activated feature of a state.
    """

    feature_id: int
    """Identifier assigned by the feature database"""

    value: float
    """Activation value of the feature"""


@dataclass(frozen=True)
class ActionFeaturesQuery(Generic[A]):
    """
    The features produced for one candidate action of a state-action query.
    """

    query_action: A
    """The candidate action these features belong to"""

    features: List[StateFeature]
    """Activated features of the state paired with the action"""


class FeatureDatabase(ABC, Generic[S, A]):
    """
    Interface for feature databases.

    A feature database owns the mapping from states (and state-action pairs)
    to feature identifiers. Identifiers are unique within one database and
    may be allocated on demand the first time a novel input is seen.
    """

    @abstractmethod
    def number_of_features(self) -> int:
        """
        Return the declared number of features.

        Returns:
            Total number of features, or 0 if features are generated on demand
        """
        pass

    @abstractmethod
    def get_state_features(self, state: S) -> List[StateFeature]:
        """
        Return the activated features of a state.

        Args:
            state: The state to extract features from

        Returns:
            Ordered list of activated features
        """
        pass

    @abstractmethod
    def get_action_features_sets(
        self,
        state: S,
        actions: Sequence[A]
    ) -> List[ActionFeaturesQuery[A]]:
        """
        Return the activated features of a state paired with each action.

        Args:
            state: The state to extract features from
            actions: Candidate actions

        Returns:
            One ActionFeaturesQuery per action, in the order given
        """
        pass

    @abstractmethod
    def copy(self) -> 'FeatureDatabase[S, A]':
        """
        Return an independent copy of this feature database.

        Returns:
            New feature database with the same configuration and identifiers
        """
        pass

    def freeze_database_state(self, frozen: bool) -> None:
        """
        Enable or disable the allocation of new feature identifiers.

        Databases with a fixed feature set have nothing to freeze and
        ignore this call.

        Args:
            frozen: True to stop allocating identifiers for novel inputs
        """
        pass

    def generate_vfa(self, default_weight: float = 0.0) -> 'LinearVFA[S, A]':
        """
        Create a linear value function approximator over this database.

        Args:
            default_weight: Initial value of lazily created weights

        Returns:
            New LinearVFA using this feature database
        """
        from vfa_lib.function_approx.linear import LinearVFA
        return LinearVFA(self, default_weight=default_weight)
