"""Deterministic input generators for the benchmark scenarios.

- synthetic.py: low-resolution before/after pair for the guided upsampling
  scenario, checked against golden fixtures
- burst.py: seeded raw frame stack and camera parameters for the burst
  camera pipeline scenario
"""

from bgubench.effects.burst import BurstParameters, make_burst_frames, make_burst_output
from bgubench.effects.synthetic import (
    DOWNSAMPLE_FACTOR,
    LowResPair,
    apply_black_box_effect,
    blend_and_vignette,
    box_downsample,
    generate_low_res_pair,
    radial_mask,
    sharpen,
    smoothstep,
)


__all__ = [
    # Guided upsampling scenario
    "DOWNSAMPLE_FACTOR",
    "LowResPair",
    "apply_black_box_effect",
    "blend_and_vignette",
    "box_downsample",
    "generate_low_res_pair",
    "radial_mask",
    "sharpen",
    "smoothstep",
    # Burst scenario
    "BurstParameters",
    "make_burst_frames",
    "make_burst_output",
]
