"""
Tests for linear value function approximation.
"""

import unittest

from vfa_lib.features import (
    FeatureDatabase,
    StateFeature,
    ActionFeaturesQuery,
    TabularFeatureDatabase,
    FunctionFeatureDatabase
)
from vfa_lib.function_approx import LinearVFA, ActionApproximationResult


class FixedFeatureDatabase(FeatureDatabase):
    """Feature database returning preset feature lists keyed by state."""

    def __init__(self, state_features, action_features=None):
        self.state_features = state_features
        self.action_features = action_features or {}
        self.copies = 0

    def number_of_features(self):
        return 0

    def get_state_features(self, state):
        return list(self.state_features[state])

    def get_action_features_sets(self, state, actions):
        return [
            ActionFeaturesQuery(a, list(self.action_features[(state, a)]))
            for a in actions
        ]

    def copy(self):
        self.copies += 1
        return FixedFeatureDatabase(dict(self.state_features), dict(self.action_features))


class BrokenCopyDatabase(FixedFeatureDatabase):
    """Feature database that cannot be copied."""

    def copy(self):
        raise ValueError("Unsupported configuration")


class TestLinearVFA(unittest.TestCase):
    """Test cases for LinearVFA."""

    def setUp(self):
        self.db = FixedFeatureDatabase(
            {
                "s": [StateFeature(1, 2.0), StateFeature(2, 3.0)],
                "t": [StateFeature(2, 1.0), StateFeature(5, 4.0)],
                "empty": [],
                "dup": [StateFeature(8, 0.5), StateFeature(8, 0.25)],
            },
            {
                ("s", "a1"): [StateFeature(10, 1.0)],
                ("s", "a2"): [StateFeature(11, 2.0)],
                ("s", "a3"): [StateFeature(12, 3.0), StateFeature(10, 1.0)],
            }
        )
        self.vfa = LinearVFA(self.db)

    def test_linearity(self):
        """Test that the prediction is the sum of activation times weight."""
        self.vfa.set_weight(1, 0.5)
        self.vfa.set_weight(2, -1.0)

        result = self.vfa.get_state_value("s")

        self.assertEqual(result.predicted_value, -2.0)
        self.assertEqual(result.state_features, (StateFeature(1, 2.0), StateFeature(2, 3.0)))
        self.assertEqual([fw.weight_id for fw in result.function_weights], [1, 2])

    def test_gradient(self):
        """Test that the gradient equals the activations."""
        self.vfa.set_weight(1, 0.5)
        self.vfa.set_weight(2, -1.0)
        result = self.vfa.get_state_value("s")

        self.assertEqual(self.vfa.get_weight_gradient(result), {1: 2.0, 2: 3.0})

    def test_gradient_does_not_touch_weights(self):
        """Test that gradient extraction leaves the weight store alone."""
        result = self.vfa.get_state_value("s")
        self.vfa.reset_weights()
        self.vfa.get_weight_gradient(result)

        self.assertIsNone(self.vfa.get_function_weight(1))

    def test_empty_features(self):
        """Test prediction and gradient on an empty feature list."""
        result = self.vfa.get_state_value("empty")

        self.assertEqual(result.predicted_value, 0.0)
        self.assertEqual(result.function_weights, ())
        self.assertEqual(len(self.vfa.get_weight_gradient(result)), 0)

    def test_lazy_creation_with_default(self):
        """Test that unseen features are absent until a prediction touches them."""
        vfa = LinearVFA(self.db, default_weight=0.5)
        self.assertIsNone(vfa.get_function_weight(1))

        result = vfa.get_state_value("s")

        self.assertEqual(result.predicted_value, 2.0 * 0.5 + 3.0 * 0.5)
        self.assertEqual(vfa.get_function_weight(1).weight_value, 0.5)
        self.assertEqual(vfa.get_function_weight(2).weight_value, 0.5)
        self.assertIsNone(vfa.get_function_weight(5))

    def test_set_weight_on_unseen_feature(self):
        """Test that set_weight creates the weight with the given value."""
        vfa = LinearVFA(self.db, default_weight=0.5)
        vfa.set_weight(42, 3.0)

        self.assertEqual(vfa.get_function_weight(42).weight_value, 3.0)

    def test_determinism(self):
        """Test that repeated predictions are identical."""
        self.vfa.set_weight(1, 0.1)
        self.vfa.set_weight(2, 0.7)

        first = self.vfa.get_state_value("s")
        second = self.vfa.get_state_value("s")

        self.assertEqual(first.predicted_value, second.predicted_value)
        self.assertEqual(first.state_features, second.state_features)

    def test_reset(self):
        """Test that reset discards weights and later predictions recreate them."""
        vfa = LinearVFA(self.db, default_weight=0.25)
        vfa.set_weight(1, 10.0)
        vfa.reset_weights()

        self.assertIsNone(vfa.get_function_weight(1))

        vfa.get_state_value("s")
        self.assertEqual(vfa.get_function_weight(1).weight_value, 0.25)

    def test_shared_weight_identity(self):
        """Test that results sharing a feature reference the same weight."""
        self.vfa.set_weight(2, 1.0)
        first = self.vfa.get_state_value("s")

        self.vfa.set_weight(2, 2.0)
        second = self.vfa.get_state_value("t")

        self.assertIs(first.function_weights[1], second.function_weights[0])
        self.assertIs(first.function_weights[1], self.vfa.get_function_weight(2))

        # First prediction keeps its value, second one sees the update
        self.assertEqual(first.predicted_value, 3.0)
        self.assertEqual(second.predicted_value, 2.0)
        self.assertEqual(first.function_weights[1].weight_value, 2.0)

    def test_external_weight_mutation(self):
        """Test that mutating a returned weight is seen by the approximator."""
        result = self.vfa.get_state_value("s")
        result.function_weights[0].set_weight(1.0)

        self.assertEqual(self.vfa.get_function_weight(1).weight_value, 1.0)
        self.assertEqual(self.vfa.get_state_value("s").predicted_value, 2.0)

    def test_features_from_generator(self):
        """Test that features given as a one-shot iterable are kept in the result."""
        self.vfa.set_weight(1, 2.0)

        result = self.vfa.get_approximation_result_from(StateFeature(i, 1.0) for i in range(3))

        self.assertEqual(result.predicted_value, 2.0)
        self.assertEqual(len(result.state_features), 3)
        self.assertEqual(len(result.function_weights), 3)
        self.assertEqual([sf.feature_id for sf in result.state_features], [0, 1, 2])
        self.assertEqual(self.vfa.get_weight_gradient(result), {0: 1.0, 1: 1.0, 2: 1.0})

    def test_duplicate_features(self):
        """Test that repeated feature ids each contribute to the sum."""
        self.vfa.set_weight(8, 2.0)
        result = self.vfa.get_state_value("dup")

        self.assertEqual(result.predicted_value, 0.5 * 2.0 + 0.25 * 2.0)
        self.assertEqual(len(result.function_weights), 2)
        self.assertIs(result.function_weights[0], result.function_weights[1])
        self.assertEqual(self.vfa.get_weight_gradient(result), {8: 0.25})

    def test_state_action_values_order(self):
        """Test that batch results follow the requested action order."""
        self.vfa.set_weight(10, 1.0)
        self.vfa.set_weight(11, 1.0)
        self.vfa.set_weight(12, 1.0)

        results = self.vfa.get_state_action_values("s", ["a3", "a1", "a2"])

        self.assertEqual([r.query_action for r in results], ["a3", "a1", "a2"])
        self.assertEqual([r.approximation_result.predicted_value for r in results], [4.0, 1.0, 2.0])

        # Feature 10 appears for two actions and is the same weight
        self.assertIs(
            results[0].approximation_result.function_weights[1],
            results[1].approximation_result.function_weights[0]
        )

    def test_extract_approximation_for_action(self):
        """Test locating the result of one action."""
        results = self.vfa.get_state_action_values("s", ["a1", "a2"])

        found = ActionApproximationResult.extract_approximation_for_action(results, "a2")
        self.assertIs(found, results[1].approximation_result)
        self.assertIsNone(ActionApproximationResult.extract_approximation_for_action(results, "a3"))

    def test_num_features(self):
        """Test that the feature count is forwarded from the database."""
        self.assertEqual(self.vfa.num_features(), 0)

        vfa = LinearVFA(FunctionFeatureDatabase([lambda s: s, lambda s: s * s], actions=[0, 1, 2]))
        self.assertEqual(vfa.num_features(), 8)

    def test_copy_isolation(self):
        """Test that a copy shares no weights with the original."""
        vfa = LinearVFA(self.db, default_weight=0.3)
        vfa.set_weight(1, 1.0)
        vfa.set_weight(2, 2.0)

        copied = vfa.copy()

        self.assertEqual(self.db.copies, 1)
        self.assertIsNot(copied.feature_database, vfa.feature_database)
        self.assertEqual(copied.default_weight, 0.3)
        self.assertEqual(copied.get_function_weight(1).weight_value, 1.0)
        self.assertIsNot(copied.get_function_weight(1), vfa.get_function_weight(1))

        copied.set_weight(1, -5.0)
        self.assertEqual(vfa.get_function_weight(1).weight_value, 1.0)

        vfa.set_weight(2, 7.0)
        self.assertEqual(copied.get_function_weight(2).weight_value, 2.0)

        # Lazily created weights of the copy use the same default
        copied.get_state_value("t")
        self.assertEqual(copied.get_function_weight(5).weight_value, 0.3)
        self.assertIsNone(vfa.get_function_weight(5))

    def test_copy_failure_propagates(self):
        """Test that a feature database copy failure fails the whole copy."""
        vfa = LinearVFA(BrokenCopyDatabase({"s": []}))

        with self.assertRaises(ValueError):
            vfa.copy()


class TestGeneratedVFA(unittest.TestCase):
    """Test cases for approximators built from concrete feature databases."""

    def test_generate_vfa(self):
        """Test the feature database factory."""
        db = TabularFeatureDatabase()
        vfa = db.generate_vfa(default_weight=0.5)

        self.assertIsInstance(vfa, LinearVFA)
        self.assertIs(vfa.feature_database, db)
        self.assertEqual(vfa.get_state_value("x").predicted_value, 0.5)

    def test_tabular_learning_step(self):
        """Test a gradient step computed outside the approximator."""
        vfa = LinearVFA(TabularFeatureDatabase())
        result = vfa.get_state_value((0, 1))
        target = 1.0
        learning_rate = 0.5

        td_error = target - result.predicted_value
        for fid, d in vfa.get_weight_gradient(result).items():
            w = vfa.get_function_weight(fid).weight_value
            vfa.set_weight(fid, w + learning_rate * td_error * d)

        self.assertEqual(vfa.get_state_value((0, 1)).predicted_value, 0.5)
        self.assertEqual(vfa.get_state_value((1, 1)).predicted_value, 0.0)

    def test_function_features(self):
        """Test prediction over feature functions with per-action weights."""
        vfa = LinearVFA(FunctionFeatureDatabase(
            [lambda _: 1., lambda s: s],
            actions=["left", "right"]
        ))
        # State weights, then one block per action
        vfa.set_weight(0, 1.0)
        vfa.set_weight(1, 2.0)
        vfa.set_weight(2, -1.0)
        vfa.set_weight(3, 0.5)
        vfa.set_weight(4, 3.0)
        vfa.set_weight(5, -1.0)

        results = vfa.get_state_action_values(4.0, ["right", "left"])

        self.assertEqual(results[0].approximation_result.predicted_value, 3.0 - 1.0 * 4.0)
        self.assertEqual(results[1].approximation_result.predicted_value, -1.0 + 0.5 * 4.0)
        self.assertEqual(vfa.get_state_value(4.0).predicted_value, 1.0 + 2.0 * 4.0)

    def test_function_features_state_and_action_weights_are_separate(self):
        """Test that state values and action values never share weights."""
        vfa = LinearVFA(FunctionFeatureDatabase(
            [lambda _: 1., lambda s: s],
            actions=["left", "right"]
        ))
        state_result = vfa.get_state_value(2.0)
        left_result = vfa.get_state_action_values(2.0, ["left"])[0].approximation_result

        for fw in state_result.function_weights:
            self.assertNotIn(fw, left_result.function_weights)

        vfa.set_weight(0, 5.0)
        left_after = vfa.get_state_action_values(2.0, ["left"])[0].approximation_result

        self.assertEqual(left_after.predicted_value, 0.0)
        self.assertEqual(vfa.get_state_value(2.0).predicted_value, 5.0)


if __name__ == '__main__':
    unittest.main()
