import json

import pytest

from fetch_utils import isint
from fetch_utils.storage import load_parameters, parameter_path, save_parameters
from geometries.fetch import FetchParameters, InvalidParameter, validate_parameters


def test_isint():
    assert isint(3)
    assert isint("4")
    assert isint(5.0)
    assert not isint(5.5)
    assert not isint("five")
    assert not isint(None)
    assert not isint(True)


class TestFetchParameters:
    """Test run parameter validation."""

    def test_defaults(self):
        params = FetchParameters()
        assert params.max_dist == 300
        assert params.n_directions == 9
        assert params.circle_fidelity == 1
        assert params.quiet is False
        assert params.site_names is None
        assert params.max_dist_m == 300_000

    @pytest.mark.parametrize("value", [1, 1.0, 250.5, 500, "42"])
    def test_max_dist_accepted(self, value):
        assert validate_parameters(max_dist=value).max_dist == float(value)

    @pytest.mark.parametrize("value", [0.99, 0, -5, 500.1, "far", None, True, float('nan'), [1, 2]])
    def test_max_dist_rejected(self, value):
        with pytest.raises(InvalidParameter):
            validate_parameters(max_dist=value)

    def test_n_directions_rounded(self):
        assert validate_parameters(n_directions=2.6).n_directions == 3
        assert validate_parameters(n_directions="4").n_directions == 4

    @pytest.mark.parametrize("value", [0, 21, -3, "many", None])
    def test_n_directions_rejected(self, value):
        with pytest.raises(InvalidParameter):
            validate_parameters(n_directions=value)

    @pytest.mark.parametrize("value", [0, 11, 1.5, "two"])
    def test_circle_fidelity_rejected(self, value):
        with pytest.raises(InvalidParameter):
            validate_parameters(circle_fidelity=value)

    def test_site_names_coerced(self):
        assert validate_parameters(site_names=[1, 'b']).site_names == ['1', 'b']
        assert validate_parameters(site_names='only').site_names == ['only']

    def test_unknown_parameter_rejected(self):
        with pytest.raises(InvalidParameter):
            validate_parameters(max_distance=10)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            validate_parameters(max_dist=1000)


class TestStorage:
    """Test saving and loading run parameters."""

    def test_round_trip(self, tmp_path):
        params = validate_parameters(max_dist=120, n_directions=4, site_names=['a', 'b'])
        path = save_parameters(params, tmp_path / "harbour")
        assert path.name == "harbour.fetch.json"
        assert load_parameters(path) == params

    def test_suffix_not_doubled(self, tmp_path):
        assert parameter_path(tmp_path / "run.fetch.json").name == "run.fetch.json"

    def test_edited_file_validated(self, tmp_path):
        path = tmp_path / "bad.fetch.json"
        path.write_text(json.dumps({"max_dist": 900}))
        with pytest.raises(InvalidParameter):
            load_parameters(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.fetch.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(InvalidParameter):
            load_parameters(path)
