"""Tests for ImageBuffer."""

import jax.numpy as jnp
import numpy as np
import pytest

from bgubench.core.buffer import ImageBuffer


class TestConstruction:
    """Tests for allocation and wrapping."""

    def test_dimensions_and_zero_fill(self):
        buffer = ImageBuffer(5, 3, 2)

        assert (buffer.width, buffer.height, buffer.channels) == (5, 3, 2)
        assert buffer.shape == (3, 5, 2)
        assert buffer.dtype == jnp.float32
        assert np.all(buffer.copy_to_host() == 0)

    def test_default_single_channel(self):
        assert ImageBuffer(4, 4).channels == 1

    @pytest.mark.parametrize("dims", [(0, 4, 1), (4, 0, 1), (4, 4, 0), (-1, 4, 1)])
    def test_non_positive_dimensions_rejected(self, dims):
        with pytest.raises(ValueError, match="positive integer"):
            ImageBuffer(*dims)

    def test_integer_dtype(self):
        buffer = ImageBuffer(2, 2, 7, dtype=jnp.uint16)
        assert buffer.dtype == jnp.uint16

    def test_from_array_hwc(self):
        array = np.arange(24, dtype=np.float32).reshape(2, 4, 3)
        buffer = ImageBuffer.from_array(array)

        assert (buffer.width, buffer.height, buffer.channels) == (4, 2, 3)
        np.testing.assert_array_equal(buffer.copy_to_host(), array)

    def test_from_array_grayscale_gains_channel_axis(self):
        buffer = ImageBuffer.from_array(np.ones((3, 5), dtype=np.float32))
        assert buffer.shape == (3, 5, 1)

    def test_from_array_rejects_wrong_rank(self):
        with pytest.raises(ValueError, match="2D or 3D"):
            ImageBuffer.from_array(np.ones((2, 2, 2, 2)))


class TestElementAccess:
    """Tests for (x, y, c) indexing."""

    def test_index_order_is_x_y_c(self):
        array = np.zeros((2, 3, 1), dtype=np.float32)
        array[1, 2, 0] = 7.0  # row y=1, column x=2
        buffer = ImageBuffer.from_array(array)

        assert float(buffer[2, 1, 0]) == 7.0

    @pytest.mark.parametrize("index", [(3, 0, 0), (0, 2, 0), (0, 0, 1), (-1, 0, 0)])
    def test_out_of_range_is_an_error(self, index):
        buffer = ImageBuffer(3, 2, 1)
        with pytest.raises(IndexError):
            buffer[index]

    def test_sample_gathers_arrays_of_coordinates(self):
        buffer = ImageBuffer(4, 4, 1).for_each_element(lambda x, y, c: 10 * y + x)
        values = buffer.sample(jnp.array([0, 3]), jnp.array([1, 2]), jnp.array([0, 0]))
        np.testing.assert_array_equal(np.asarray(values), [10.0, 23.0])


class TestMapping:
    """Tests for fill, for_each_element, for_each_value and assign."""

    def test_fill_sets_every_element(self):
        buffer = ImageBuffer(3, 3, 2).fill(0.25)
        np.testing.assert_array_equal(buffer.copy_to_host(), np.full((3, 3, 2), 0.25))

    def test_fill_returns_self(self):
        buffer = ImageBuffer(1, 1)
        assert buffer.fill(1.0) is buffer

    def test_for_each_element_visits_every_coordinate_once(self):
        buffer = ImageBuffer(5, 4, 3).for_each_element(lambda x, y, c: x + 100 * y + 10000 * c)
        values = buffer.copy_to_host().ravel()

        assert len(np.unique(values)) == 5 * 4 * 3
        assert float(buffer[4, 3, 2]) == 4 + 300 + 20000

    def test_for_each_element_broadcasts_scalars(self):
        buffer = ImageBuffer(2, 2, 2).for_each_element(lambda x, y, c: 3.0)
        assert np.all(buffer.copy_to_host() == 3.0)

    def test_for_each_element_reads_other_buffers(self):
        source = ImageBuffer(3, 3, 1).for_each_element(lambda x, y, c: x * y)
        target = ImageBuffer(3, 3, 1).for_each_element(lambda x, y, c: 2 * source.sample(x, y, c))
        assert float(target[2, 2, 0]) == 8.0

    def test_for_each_element_casts_to_buffer_dtype(self):
        buffer = ImageBuffer(2, 2, 1, dtype=jnp.uint8).for_each_element(lambda x, y, c: x + 0.0)
        assert buffer.dtype == jnp.uint8

    def test_for_each_value_maps_contents(self):
        buffer = ImageBuffer(2, 2, 1).fill(2.0).for_each_value(lambda v: v * v)
        assert np.all(buffer.copy_to_host() == 4.0)

    def test_assign_replaces_contents(self):
        buffer = ImageBuffer(2, 3, 1)
        buffer.assign(np.ones((3, 2, 1)))
        assert np.all(buffer.copy_to_host() == 1.0)

    def test_assign_rejects_wrong_shape(self):
        buffer = ImageBuffer(2, 3, 1)
        with pytest.raises(ValueError, match="Cannot assign"):
            buffer.assign(np.ones((2, 3, 1)))


class TestCompletion:
    """Tests for the completion barrier and host copies."""

    def test_device_sync_returns_self(self):
        buffer = ImageBuffer(2, 2, 1).fill(1.0)
        assert buffer.device_sync() is buffer

    def test_copy_to_host_is_numpy(self):
        host = ImageBuffer(2, 2, 1).copy_to_host()
        assert isinstance(host, np.ndarray)
        assert host.shape == (2, 2, 1)
