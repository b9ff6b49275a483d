"""
Feature database module for VFA library.

This module provides the feature database interface, which converts states
and state-action pairs into sparse lists of activated features, along with
simple concrete databases.
"""

from vfa_lib.features.base import FeatureDatabase, StateFeature, ActionFeaturesQuery
from vfa_lib.features.tabular import TabularFeatureDatabase
from vfa_lib.features.functional import FunctionFeatureDatabase

__all__ = [
    'FeatureDatabase',
    'StateFeature',
    'ActionFeaturesQuery',
    'TabularFeatureDatabase',
    'FunctionFeatureDatabase'
]
