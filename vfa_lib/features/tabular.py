"""
Tabular feature database.

Every distinct state (or state-action pair) gets its own indicator feature,
so a linear approximator over this database behaves like a lookup table.
"""

from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from vfa_lib.features.base import FeatureDatabase, StateFeature, ActionFeaturesQuery


class TabularFeatureDatabase(FeatureDatabase[Hashable, Hashable]):
    """
    Feature database with one lazily allocated indicator feature per input.

    Identifiers are allocated in first-seen order from a single counter shared
    by state and state-action queries. The number of features is not known in
    advance, so number_of_features() reports 0.
    """

    def __init__(self):
        self.state_ids: Dict[Hashable, int] = {}
        self.state_action_ids: Dict[Tuple[Hashable, Hashable], int] = {}
        self.next_id = 0
        self.frozen = False

    def _feature_id(self, table: Dict, key: Hashable) -> Optional[int]:
        fid = table.get(key)
        if fid is None and not self.frozen:
            fid = self.next_id
            table[key] = fid
            self.next_id += 1
        return fid

    def number_of_features(self) -> int:
        return 0

    def get_state_features(self, state: Hashable) -> List[StateFeature]:
        fid = self._feature_id(self.state_ids, state)
        if fid is None:
            return []
        return [StateFeature(fid, 1.0)]

    def get_action_features_sets(
        self,
        state: Hashable,
        actions: Sequence[Hashable]
    ) -> List[ActionFeaturesQuery[Hashable]]:
        queries = []
        for action in actions:
            fid = self._feature_id(self.state_action_ids, (state, action))
            features = [] if fid is None else [StateFeature(fid, 1.0)]
            queries.append(ActionFeaturesQuery(action, features))
        return queries

    def freeze_database_state(self, frozen: bool) -> None:
        self.frozen = frozen

    def copy(self) -> 'TabularFeatureDatabase':
        db = TabularFeatureDatabase()
        db.state_ids = dict(self.state_ids)
        db.state_action_ids = dict(self.state_action_ids)
        db.next_id = self.next_id
        db.frozen = self.frozen
        return db

    def __repr__(self) -> str:
        return (f"TabularFeatureDatabase(states={len(self.state_ids)}, "
                f"state_actions={len(self.state_action_ids)}, frozen={self.frozen})")
