"""
Tests for the Chains container: construction, indexing, extraction, sorting.
"""

import numpy as np
import pytest

from mcmcchains import Chains
from mcmcchains.errors import ChainsError, ShapeError, UnknownSectionError, UnknownVariableError


def labelled_draws(n, names, m):
    """Draws where value[i, j, k] encodes (iteration, variable, chain)."""
    i, j, k = np.meshgrid(np.arange(n), np.arange(len(names)), np.arange(m), indexing="ij")
    return 100.0 * i + 10.0 * j + k


class TestConstruction:
    def test_defaults(self):
        c = Chains(np.zeros((10, 3, 2)))
        assert c.size() == (10, 3, 2)
        assert c.variable_names() == ("Param1", "Param2", "Param3")
        assert c.chain_ids() == ("Chain1", "Chain2")
        assert c.logevidence == 0.0
        assert c.info == {}
        assert c.name_map == {"parameters": ["Param1", "Param2", "Param3"]}

    def test_size_reports_last_iteration(self):
        c = Chains(np.zeros((10, 2, 3)), start=101, thin=2)
        assert c.size() == (101 + 9 * 2, 2, 3)
        assert c.size(0) == 119
        assert c.size(2) == 3
        assert c.n_iterations == 10
        assert c.first() == 101
        assert c.last() == 119
        assert c.step() == 2
        assert c.iterations() == range(101, 121, 2)

    def test_variables_sorted_naturally(self):
        names = ["Param10", "Param2", "Param1"]
        raw = labelled_draws(4, names, 2)
        c = Chains(raw, names)
        assert c.variable_names() == ("Param1", "Param2", "Param10")
        assert np.array_equal(c["Param10"], raw[:, 0, :])
        assert np.array_equal(c["Param1"], raw[:, 2, :])

    def test_many_default_names_stay_in_order(self):
        c = Chains(np.zeros((2, 12, 1)))
        assert c.variable_names() == tuple(f"Param{i}" for i in range(1, 13))

    def test_auto_sections(self):
        c = Chains(np.zeros((3, 3, 1)), ["beta1", "_tau", "tau_"])
        assert c.name_map["parameters"] == ["beta1"]
        assert c.name_map["internals"] == ["_tau", "tau_"]

    def test_single_section_map(self):
        c = Chains(np.zeros((3, 3, 1)), ["beta1", "_tau", "tau_"], {"all": []})
        assert sorted(c.name_map["all"]) == ["_tau", "beta1", "tau_"]
        assert "parameters" in c.name_map

    def test_integer_values_become_float(self):
        c = Chains(np.ones((2, 1, 1), dtype=int))
        assert np.issubdtype(c.value.dtype, np.floating)

    def test_none_becomes_nan(self):
        c = Chains([[[1.0], [None]], [[2.0], [3.0]]], ["a", "b"])
        assert np.isnan(c[0, "b", 0])
        assert c[1, "b", 0] == 3.0

    def test_input_array_is_copied(self):
        raw = np.zeros((2, 1, 1))
        c = Chains(raw)
        c["Param1"] = 5.0
        assert raw.sum() == 0.0

    def test_not_three_dimensional(self):
        with pytest.raises(ShapeError):
            Chains(np.zeros((3, 2)))

    def test_complex_values_rejected(self):
        with pytest.raises(ChainsError):
            Chains(np.ones((3, 2, 1)) + 1j)

    def test_string_values_rejected(self):
        with pytest.raises(ValueError):
            Chains(np.full((3, 2, 1), "x"))

    def test_superscript_name(self):
        c = Chains(np.zeros((2, 2, 1)), ["x", "x\u00b2"])
        assert c.variable_names() == ("x", "x\u00b2")

    def test_name_count_mismatch(self):
        with pytest.raises(ShapeError):
            Chains(np.zeros((3, 2, 1)), ["a"])

    def test_chain_id_count_mismatch(self):
        with pytest.raises(ShapeError):
            Chains(np.zeros((3, 2, 1)), chain_ids=["x", "y"])

    def test_metadata(self):
        c = Chains(np.zeros((1, 1, 1)), logevidence=-3.5, info={"sampler": "nuts"})
        assert c.logevidence == -3.5
        assert c.info == {"sampler": "nuts"}

    def test_repr_has_header(self):
        text = repr(Chains(np.zeros((10, 1, 1))))
        assert text.startswith('Object of type "Chains"')
        assert "Iterations        = 1:10" in text


class TestIndexing:
    @pytest.fixture
    def chn(self):
        names = ["a", "b", "c"]
        return Chains(labelled_draws(6, names, 3), names)

    def test_single_name(self, chn):
        out = chn["b"]
        assert out.shape == (6, 3)
        assert np.array_equal(out, chn.value[:, 1, :])

    def test_name_list(self, chn):
        out = chn[["c", "a"]]
        assert out.shape == (6, 2, 3)
        assert np.array_equal(out[:, 0, :], chn.value[:, 2, :])

    def test_positional_variable(self, chn):
        assert np.array_equal(chn[0], chn["a"])

    def test_full_index(self, chn):
        assert chn[2, "b", "Chain3"] == 200.0 + 10.0 + 2.0
        assert chn[0:4, "a", "Chain2"].shape == (4,)

    def test_outer_selection(self, chn):
        out = chn[:, ["a", "c"], ["Chain1", "Chain3"]]
        assert out.shape == (6, 2, 2)
        assert out[1, 1, 1] == chn.value[1, 2, 2]

    def test_wildcards(self, chn):
        assert chn[..., "a", :].shape == (6, 3)
        assert chn[1:3].shape == (6, 2, 3)
        assert chn[(1,)].shape == (3, 3)

    def test_unknown_label(self, chn):
        with pytest.raises(UnknownVariableError):
            chn["zzz"]
        with pytest.raises(KeyError):
            chn[:, "a", "Chain7"]

    def test_too_many_indices(self, chn):
        with pytest.raises(IndexError):
            chn[0, 0, 0, 0]

    def test_set_variable(self, chn):
        chn["b"] = 0.0
        assert np.all(chn.value[:, 1, :] == 0.0)
        assert np.all(chn.value[1:, 0, :] != 0.0)

    def test_set_element(self, chn):
        chn[0, "a", "Chain1"] = -1.0
        assert chn.value[0, 0, 0] == -1.0

    def test_set_outer_selection(self, chn):
        chn[:, ["a", "c"], ["Chain1", "Chain2"]] = np.full((6, 2, 2), 7.0)
        assert np.all(chn.value[:, [0, 2], :2] == 7.0)
        assert np.all(chn.value[1:, :, 2] != 7.0)

    def test_set_outer_selection_with_scalar_axis(self, chn):
        chn[0, ["a", "b"], ["Chain1", "Chain3"]] = np.array([[1.0, 2.0], [3.0, 4.0]])
        assert chn.value[0, 0, 0] == 1.0
        assert chn.value[0, 0, 2] == 2.0
        assert chn.value[0, 1, 0] == 3.0
        assert chn.value[0, 1, 2] == 4.0

    def test_set_scalar_and_sequence_on_separate_axes(self, chn):
        chn[1, :, ["Chain1", "Chain3"]] = np.arange(6.0).reshape(3, 2)
        for j in range(3):
            assert chn.value[1, j, 0] == 2 * j
            assert chn.value[1, j, 2] == 2 * j + 1
            assert chn.value[1, j, 1] == 100 + 10 * j + 1

    def test_set_broadcasts_row_over_kept_axes(self, chn):
        chn[2, :, ["Chain1", "Chain2"]] = np.array([7.0, 8.0])
        np.testing.assert_array_equal(chn.value[2, :, 0], [7.0, 7.0, 7.0])
        np.testing.assert_array_equal(chn.value[2, :, 1], [8.0, 8.0, 8.0])

    @pytest.mark.parametrize("shape", [(4, 2, 2), (4, 3, 2)])
    def test_write_back_of_read_is_identity(self, shape):
        names = ["a", "b", "c"][: shape[1]]
        c = Chains(np.arange(float(np.prod(shape))).reshape(shape), names)
        before = c.value.copy()
        for key in [(0, slice(None), ["Chain1", "Chain2"]), (slice(1, 3), "a", ["Chain2"]), (["a", "b"],)]:
            c[key] = c[key].copy()
            np.testing.assert_array_equal(c.value, before)

    def test_read_matches_written_layout(self, chn):
        key = (0, slice(None), ["Chain1", "Chain2"])
        new = np.arange(6.0).reshape(3, 2)
        chn[key] = new
        np.testing.assert_array_equal(chn[key], new)


class TestExtract:
    @pytest.fixture
    def chn(self):
        names = ["mu", "b10", "b2", "lp__"]
        return Chains(
            labelled_draws(5, names, 2),
            names,
            {"grp": ["b10", "b2"], "parameters": []},
            info={"run": 1},
        )

    def test_name_map(self, chn):
        assert chn.name_map == {"grp": ["b10", "b2"], "parameters": ["mu"], "internals": ["lp__"]}

    def test_single_section(self, chn):
        e = chn.extract("internals")
        assert e.variable_names() == ("lp__",)
        assert e.name_map == {"internals": ["lp__"]}
        assert np.array_equal(e["lp__"], chn["lp__"])

    def test_sorted_by_default(self, chn):
        e = chn.extract("grp")
        assert e.variable_names() == ("b2", "b10")
        assert np.array_equal(e["b10"], chn["b10"])

    def test_unsorted(self, chn):
        e = chn.extract("grp", sorted=False)
        assert e.variable_names() == ("b10", "b2")
        assert np.array_equal(e["b2"], chn["b2"])

    def test_several_sections(self, chn):
        e = chn.extract(["internals", "parameters"], sorted=False)
        assert e.variable_names() == ("lp__", "mu")
        assert list(e.name_map) == ["internals", "parameters"]

    def test_all_sections_round_trip(self, chn):
        e = chn.extract(list(chn.name_map))
        assert sorted(e.variable_names()) == sorted(chn.variable_names())
        assert e.variable_names() == chn.variable_names()

    def test_empty_request_returns_same_object(self, chn):
        assert chn.extract([]) is chn

    def test_unknown_section(self, chn):
        with pytest.raises(UnknownSectionError) as exc:
            chn.extract(["grp", "nope"])
        assert "nope" in str(exc.value)

    def test_section_with_missing_variable(self):
        c = Chains(np.zeros((2, 2, 1)), ["a", "b"], {"grp": ["zzz"], "parameters": []})
        with pytest.raises(UnknownVariableError):
            c.extract("grp")

    def test_overlapping_sections(self):
        c = Chains(np.zeros((2, 2, 1)), ["a", "b"], {"x": ["a", "b"], "y": ["b"]})
        e = c.extract(["x", "y"])
        assert e.variable_names() == ("a", "b")

    def test_metadata_carried(self, chn):
        e = chn.extract("parameters")
        assert e.info == {"run": 1}
        assert e.iterations() == chn.iterations()
        assert e.chain_ids() == chn.chain_ids()

    def test_extract_does_not_alias(self, chn):
        e = chn.extract("parameters")
        e["mu"] = -1.0
        assert np.all(chn["mu"] != -1.0)

    def test_get_sections(self, chn):
        parts = chn.get_sections()
        assert [list(p.name_map) for p in parts] == [["grp"], ["parameters"], ["internals"]]
        only = chn.get_sections("grp")
        assert len(only) == 1
        assert only[0].variable_names() == ("b2", "b10")


class TestSort:
    def test_idempotent(self):
        c = Chains(labelled_draws(3, ["x2", "x10", "x1"], 2), ["x2", "x10", "x1"])
        s = c.sort()
        assert s is not c
        assert s.variable_names() == c.variable_names()
        assert np.array_equal(s.value, c.value)
        assert s.name_map == c.name_map
        assert s.axes == c.axes

    def test_unsorted_extract_then_sort(self):
        c = Chains(np.zeros((2, 3, 1)), ["p10", "p9", "p1"], {"g": ["p10", "p9", "p1"], "parameters": []})
        e = c.extract("g", sorted=False)
        assert e.variable_names() == ("p10", "p9", "p1")
        s = e.sort()
        assert s.variable_names() == ("p1", "p9", "p10")
        assert s.name_map == e.name_map
        assert s.logevidence == e.logevidence

    def test_copy_is_independent(self):
        c = Chains(np.zeros((2, 1, 1)))
        d = c.copy()
        d["Param1"] = 1.0
        assert c.value.sum() == 0.0
