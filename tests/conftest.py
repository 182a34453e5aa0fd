"""Test configuration for bgubench."""

import os
import sys
from pathlib import Path

# Keep JAX on the host and quiet during collection.
os.environ.setdefault("JAX_PLATFORMS", "cpu")

import jax.numpy as jnp
import numpy as np
import pytest

# Add the src directory to the Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from bgubench.core.buffer import ImageBuffer  # noqa: E402
from bgubench.effects.synthetic import generate_low_res_pair  # noqa: E402


def pytest_configure(config):
    """Register custom markers for pytest."""
    config.addinivalue_line("markers", "end_to_end: mark test as an end-to-end harness run")


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Drop BGUBENCH_* variables inherited from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("BGUBENCH_"):
            monkeypatch.delenv(name)


@pytest.fixture
def gray_image() -> ImageBuffer:
    """64x64 RGB image of constant 0.5."""
    return ImageBuffer(64, 64, 3).fill(0.5)


@pytest.fixture
def gradient_array() -> np.ndarray:
    """Deterministic 64x48 RGB float image with edges and a smooth ramp."""
    height, width = 48, 64
    y, x = np.mgrid[0:height, 0:width].astype(np.float32)
    ramp = x / (width - 1)
    checker = ((x // 4 + y // 4) % 2).astype(np.float32)
    image = np.stack([ramp, checker, 0.5 * ramp + 0.25 * checker], axis=-1)
    return image.astype(np.float32)


@pytest.fixture
def gradient_image(gradient_array: np.ndarray) -> ImageBuffer:
    return ImageBuffer.from_array(gradient_array, dtype=jnp.float32)


@pytest.fixture
def harness_files(tmp_path: Path, gradient_array: np.ndarray) -> dict[str, Path]:
    """Input image and matching lossless golden fixtures on disk.

    Returns paths keyed by ``input``, ``before``, ``after`` and ``fixtures_dir``.
    """
    fixtures_dir = tmp_path / "images"
    fixtures_dir.mkdir()
    input_path = tmp_path / "input.npy"
    np.save(input_path, gradient_array)

    pair = generate_low_res_pair(ImageBuffer.from_array(gradient_array, dtype=jnp.float32))
    before_path = fixtures_dir / "low_res_in.npy"
    after_path = fixtures_dir / "low_res_out.npy"
    np.save(before_path, pair.before.copy_to_host())
    np.save(after_path, pair.after.copy_to_host())

    return {
        "input": input_path,
        "before": before_path,
        "after": after_path,
        "fixtures_dir": fixtures_dir,
    }
