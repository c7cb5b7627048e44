import pytest
from ibc.pipeline.timeout import estimate_timeout

@pytest.mark.parametrize("count,level,expected", [
    (3, 2, 60),
    (2, 3, 50),
    (1, 0, 10),
    (0, 7, 0),
    (10, 7, 450),
])
def test_estimate_timeout(count, level, expected):
    assert estimate_timeout(count, level) == expected

def test_estimate_timeout_custom_constants():
    assert estimate_timeout(4, 2, base_per_task=1, per_level_factor=2) == 4 + 16

def test_estimate_timeout_negative_count():
    with pytest.raises(ValueError):
        estimate_timeout(-1, 2)
