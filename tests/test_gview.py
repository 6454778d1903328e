import pytest

from haribote.gview import dither_image, rgb2pal, window_size


@pytest.mark.parametrize("x,y", [(0, 0), (1, 0), (0, 1), (1, 1)])
def test_black_and_white_map_to_cube_corners(x, y):
    assert rgb2pal(0, 0, 0, x, y) == 16
    assert rgb2pal(255, 255, 255, x, y) == 231


def test_results_stay_inside_cube():
    for value in range(0, 256, 5):
        for x in range(2):
            for y in range(2):
                assert 16 <= rgb2pal(value, 255 - value, value // 2, x, y) <= 231


def test_dither_pattern_varies_with_position():
    values = {rgb2pal(30, 30, 30, x, y) for x in range(2) for y in range(2)}
    assert len(values) > 1


def test_pattern_repeats_every_two_pixels():
    for x in range(4):
        for y in range(4):
            assert rgb2pal(100, 150, 200, x, y) == rgb2pal(100, 150, 200, x + 2, y + 2)


def test_dither_image_matches_per_pixel_mapping():
    width, height = 3, 2
    pixels = bytearray()
    colours = [(10, 200, 90), (255, 0, 0), (0, 0, 0), (30, 30, 30), (1, 2, 3), (99, 98, 97)]
    for b, g, r in colours:
        pixels += bytes((b, g, r, 0))
    out = dither_image(bytes(pixels), width, height)
    assert len(out) == width * height
    for n, (b, g, r) in enumerate(colours):
        y, x = divmod(n, width)
        assert out[n] == rgb2pal(r, g, b, x, y)


def test_dither_image_rejects_short_data():
    with pytest.raises(ValueError):
        dither_image(bytes(7), 2, 1)


def test_small_picture_gets_minimum_width():
    xsize, ysize = window_size(20, 50)
    assert xsize == 136
    assert ysize - 50 == 37


def test_largest_picture():
    assert window_size(1024, 768) == (1040, 805)


@pytest.mark.parametrize("width,height", [(1025, 10), (10, 769)])
def test_too_large_picture(width, height):
    with pytest.raises(ValueError):
        window_size(width, height)