from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for runtime value-model tests")
class RuntimeValueModelTests(unittest.TestCase):
    def test_scalar_and_vector_constructors(self) -> None:
        from j_jax.values import JArray

        scalar = JArray.scalar(7)
        self.assertEqual(scalar.shape, ())
        self.assertEqual(scalar.data, (7,))
        self.assertEqual(scalar.rank, 0)

        vec = JArray.vector([1, 2, 3])
        self.assertEqual(vec.shape, (3,))
        self.assertEqual(vec.rank, 1)
        self.assertEqual(vec.size, 3)

    def test_shape_and_data_must_agree(self) -> None:
        from j_jax.values import JArray

        with self.assertRaises(ValueError):
            JArray(shape=(2, 2), data=(1, 2, 3))
        with self.assertRaises(ValueError):
            JArray(shape=(), data=())
        with self.assertRaises(ValueError):
            JArray(shape=(-1,), data=())

    def test_data_must_be_32_bit_integers(self) -> None:
        from j_jax.values import INT_MAX, INT_MIN, JArray

        JArray.vector([INT_MIN, INT_MAX])
        with self.assertRaises(ValueError):
            JArray.scalar(INT_MAX + 1)
        with self.assertRaises(TypeError):
            JArray(shape=(1,), data=(True,))
        with self.assertRaises(TypeError):
            JArray(shape=(1,), data=(1.5,))

    def test_equality_is_structural(self) -> None:
        from j_jax.values import JArray

        self.assertEqual(JArray.vector([1, 2]), JArray(shape=(2,), data=(1, 2)))
        self.assertNotEqual(JArray.scalar(1), JArray.vector([1]))
        self.assertEqual(len({JArray.scalar(3), JArray.scalar(3)}), 1)

    def test_tally_and_scalar_queries(self) -> None:
        from j_jax.values import JArray

        table = JArray(shape=(2, 3), data=tuple(range(6)))
        self.assertEqual(table.tally, 2)
        self.assertEqual(JArray.scalar(9).tally, 1)
        self.assertTrue(JArray.scalar(9).is_scalar)
        self.assertTrue(JArray.vector([9]).is_scalar)
        self.assertFalse(JArray.vector([]).is_scalar)
        self.assertEqual(JArray.vector([9]).item(), 9)
        with self.assertRaises(ValueError):
            table.item()

    def test_jax_conversion_preserves_shape_and_data(self) -> None:
        import jax.numpy as jnp

        from j_jax.values import JArray

        table = JArray(shape=(2, 3), data=tuple(range(6)))
        arr = table.as_jax_array()
        self.assertEqual(arr.shape, (2, 3))
        self.assertEqual(arr.dtype, jnp.int32)
        self.assertEqual(JArray.from_jax(arr), table)
        self.assertEqual(JArray.from_jax(jnp.asarray(4)), JArray.scalar(4))
        self.assertEqual(JArray.from_jax(jnp.zeros((0, 3), dtype=jnp.int32)), JArray(shape=(0, 3), data=()))


if __name__ == "__main__":
    unittest.main()
