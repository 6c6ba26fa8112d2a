import numpy as np
import pytest

from edgemap.convolution import BoundaryPolicy, accumulate, add_clamped, boundary_policy, convolve
from edgemap.errors import DimensionMismatch, EdgeMapError, InvalidRaster
from edgemap.kernels import Kernel, gaussian_kernel, identity_kernel, sobel_x
from edgemap.raster import Raster

BOX_3x3 = Kernel(np.ones((3, 3)))


@pytest.mark.parametrize("policy", list(BoundaryPolicy))
def test_identity_kernel_returns_raster_unchanged(random_raster, policy):
    out = convolve(random_raster, identity_kernel(), policy)
    assert out == random_raster
    assert out is not random_raster


def test_zero_sum_kernel_does_not_divide_by_zero(random_raster):
    out = convolve(random_raster, sobel_x())
    assert out.shape == random_raster.shape
    out = convolve(random_raster, Kernel([[1, 0, -1]]))
    assert out.shape == random_raster.shape


def test_source_is_never_mutated(random_raster):
    before = random_raster.to_array()
    convolve(random_raster, gaussian_kernel(1.0))
    assert np.array_equal(random_raster.data, before)


def test_drop_policy_darkens_left_border_and_trims_other_edges():
    src = Raster.filled(5, 4, 100)
    out = convolve(src, BOX_3x3, BoundaryPolicy.DROP).data
    # Left column: first tap of every kernel row is out of range.
    assert out[:, 0].tolist() == [0, 0, 0, 0]
    # Interior: full footprint, 900 / 9.
    assert out[1:3, 1:4].tolist() == [[100, 100, 100], [100, 100, 100]]
    # Right column keeps taps up to the edge: 6 taps -> 600 / 9 = 66.7.
    assert out[1, 4] == 67
    # Top row loses the kernel row above: 6 taps.
    assert out[0, 2] == 67
    # Top-right corner: 2 rows x 2 taps.
    assert out[0, 4] == 44


def test_zero_policy_is_symmetric_at_the_left_border():
    src = Raster.filled(5, 4, 100)
    out = convolve(src, BOX_3x3, BoundaryPolicy.ZERO).data
    assert out[1, 0] == out[1, 4] == 67
    assert out[0, 0] == 44


@pytest.mark.parametrize("policy", [BoundaryPolicy.EXTEND, BoundaryPolicy.WRAP])
def test_extend_and_wrap_keep_a_uniform_raster_uniform(policy):
    src = Raster.filled(6, 5, 100)
    assert convolve(src, BOX_3x3, policy) == src


def test_wrap_policy_reads_the_opposite_edge():
    src = Raster([[0, 0, 90]])
    out = convolve(src, Kernel([[1, 1, 1]]), BoundaryPolicy.WRAP)
    # x=0 sees x=-1 -> x=2 (90): 90 / 3
    assert out.data.tolist() == [[30, 30, 30]]


def test_policy_can_be_given_by_name():
    src = Raster.filled(4, 4, 50)
    assert convolve(src, BOX_3x3, "extend") == src


def test_division_rounds_half_up():
    # x=1: (0 + 1) / 2 = 0.5 -> 1 ; x=2: right tap out of range, 0 / 2 -> 0
    out = convolve(Raster([[0, 0, 1]]), Kernel([[1, 0, 1]]))
    assert out.data.tolist() == [[0, 1, 0]]


def test_results_are_clamped_to_byte_range():
    src = Raster([[0, 0, 255, 255, 255]])
    out = convolve(src, Kernel([[-1, 0, 1]])).data
    assert out.tolist() == [[0, 255, 255, 0, 0]]


def test_accumulate_returns_unclamped_sums():
    src = Raster([[0, 0, 255, 255, 255]])
    acc = accumulate(src, Kernel([[-1, 0, 1]]))
    assert acc.tolist() == [[0.0, 255.0, 255.0, 0.0, -255.0]]


def test_convolve_rejects_colour_rasters():
    rgb = Raster(np.zeros((3, 3, 3), dtype=np.uint8))
    with pytest.raises(InvalidRaster):
        convolve(rgb, identity_kernel())


def test_kernel_larger_than_raster():
    src = Raster([[200]])
    assert convolve(src, gaussian_kernel(1.0), BoundaryPolicy.EXTEND) == src
    assert convolve(src, gaussian_kernel(1.0), BoundaryPolicy.DROP).data.tolist() == [[0]]


def test_add_clamped_saturates():
    a = Raster([[200, 10]])
    b = Raster([[100, 20]])
    assert add_clamped(a, b).data.tolist() == [[255, 30]]


def test_add_clamped_rejects_mismatched_shapes():
    with pytest.raises(DimensionMismatch):
        add_clamped(Raster.filled(2, 2), Raster.filled(3, 2))


def test_boundary_policy_names_are_case_insensitive(random_raster):
    assert boundary_policy("DROP") is BoundaryPolicy.DROP
    assert boundary_policy(" Wrap ") is BoundaryPolicy.WRAP
    assert boundary_policy(BoundaryPolicy.EXTEND) is BoundaryPolicy.EXTEND
    assert convolve(random_raster, BOX_3x3, "ZERO") == convolve(random_raster, BOX_3x3, BoundaryPolicy.ZERO)


@pytest.mark.parametrize("name", ["mirror", "", 3])
def test_unknown_boundary_policy_lists_the_choices(random_raster, name):
    with pytest.raises(EdgeMapError, match="drop, zero, extend, wrap"):
        convolve(random_raster, BOX_3x3, name)
