"""
Weight storage for linear function approximation.

This module provides the mutable per-feature weights of a linear value
function approximator and the store that owns them.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from vfa_lib.features.base import FeatureDatabase


@dataclass(eq=False)
class FunctionWeight:
    """
    The weight associated with one feature.

    Weights compare by identity: the same instance is handed out for the
    same feature id for as long as it lives in its WeightStore, so updates
    made through any reference are seen by every holder.
    """

    weight_id: int
    """Identifier of the feature this weight multiplies"""

    weight_value: float
    """Current value of the weight"""

    def set_weight(self, w: float) -> None:
        """
        Overwrite the value of this weight in place.

        Args:
            w: New weight value
        """
        self.weight_value = w

    def __repr__(self) -> str:
        return f"FunctionWeight(id={self.weight_id}, value={self.weight_value})"


class WeightStore:
    """
    Mapping from feature ids to lazily created function weights.

    The store is the single owner of its FunctionWeight instances. A weight
    is created the first time its feature id is requested or set, and is
    only discarded by reset().
    """

    def __init__(
        self,
        default_weight: float = 0.0,
        feature_database: Optional['FeatureDatabase'] = None
    ):
        """
        Initialize an empty weight store.

        Args:
            default_weight: Initial value of weights created on demand
            feature_database: Feature database whose declared feature count
                this store reports
        """
        self.default_weight = default_weight
        self.feature_database = feature_database
        self.weights: Dict[int, FunctionWeight] = {}

    def get_or_create(self, feature_id: int) -> FunctionWeight:
        """
        Return the weight for a feature, creating it if it does not exist.

        Args:
            feature_id: Feature identifier

        Returns:
            The stored weight, initialized to the default weight when new
        """
        fw = self.weights.get(feature_id)
        if fw is None:
            fw = FunctionWeight(feature_id, self.default_weight)
            self.weights[feature_id] = fw
        return fw

    def set(self, feature_id: int, w: float) -> None:
        """
        Set the value of a feature's weight.

        An existing weight is updated in place so outstanding references see
        the new value; otherwise a new weight is created with value w.

        Args:
            feature_id: Feature identifier
            w: New weight value
        """
        fw = self.weights.get(feature_id)
        if fw is None:
            self.weights[feature_id] = FunctionWeight(feature_id, w)
        else:
            fw.set_weight(w)

    def get(self, feature_id: int) -> Optional[FunctionWeight]:
        """
        Look up a weight without creating it.

        Args:
            feature_id: Feature identifier

        Returns:
            The stored weight, or None if the feature has never been seen
        """
        return self.weights.get(feature_id)

    def reset(self) -> None:
        """Discard every stored weight."""
        self.weights.clear()

    def count_declared_features(self) -> int:
        """
        Return the number of features declared by the feature database.

        Returns:
            Declared feature count, or 0 when unknown in advance
        """
        if self.feature_database is None:
            return 0
        return self.feature_database.number_of_features()

    def copy(self, feature_database: Optional['FeatureDatabase'] = None) -> 'WeightStore':
        """
        Return a store holding new weights with the same ids and values.

        Args:
            feature_database: Feature database for the copy; defaults to
                this store's database

        Returns:
            Independent WeightStore sharing no FunctionWeight instances
        """
        if feature_database is None:
            feature_database = self.feature_database
        store = WeightStore(self.default_weight, feature_database)
        store.weights = {
            fid: FunctionWeight(fw.weight_id, fw.weight_value)
            for fid, fw in self.weights.items()
        }
        return store

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, feature_id: int) -> bool:
        return feature_id in self.weights

    def __iter__(self) -> Iterator[Tuple[int, FunctionWeight]]:
        return iter(list(self.weights.items()))

    def __repr__(self) -> str:
        return f"WeightStore(size={len(self.weights)}, default_weight={self.default_weight})"
