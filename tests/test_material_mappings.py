"""
Tests for material recognition and the density/price catalog.

Run with: pytest tests/test_material_mappings.py -v
"""
import pytest

from material_mappings import (
    DEFAULT_DESIGNATION,
    DEFAULT_DENSITY_G_CM3,
    DEFAULT_PRICE_PER_KG,
    DENSITY_TABLE,
    MaterialCatalog,
    load_material_catalog,
    match_designation,
    resolve_material,
)


class TestMatchDesignation:

    @pytest.mark.parametrize("line,expected", [
        ("1.2210", "1.2210"),
        ("Werkstoff: 1.4301", "1.4301"),
        ("S355J2", "S355"),
        ("s355", "S355"),
        ("Material 42crmo4 vergütet", "42CrMo4"),
        ("X5CrNi18-10", "X5CrNi18-10"),
        ("ALMG3", "AlMg3"),
        ("EN AW 6061", "EN AW-6061"),
        ("EN-AW-6082 T6", "EN AW-6082"),
        ("Ø25 h6", None),
        ("12.34.56-7890", None),
    ])
    def test_patterns(self, line, expected):
        assert match_designation(line) == expected

    def test_patterns_tried_in_order_within_line(self):
        assert match_designation("C45 oder 1.0503") == "1.0503"


class TestResolveMaterial:

    def test_first_matching_line_wins(self):
        material = resolve_material(["Zeichnung", "C45", "1.2210"])
        assert material.designation == "C45"

    def test_tool_steel_values(self):
        material = resolve_material(["1.2210"])
        assert material.density_g_cm3 == 7.85
        assert material.price_per_kg == 1.50
        assert not material.is_default

    def test_price_list(self):
        assert resolve_material(["1.0060"]).price_per_kg == 1.30
        assert resolve_material(["1.0038"]).price_per_kg == 1.20

    def test_default_when_nothing_matches(self):
        material = resolve_material(["Ø25", "120"])
        assert material.designation == DEFAULT_DESIGNATION
        assert material.density_g_cm3 == DEFAULT_DENSITY_G_CM3
        assert material.price_per_kg == DEFAULT_PRICE_PER_KG
        assert material.is_default

    def test_empty_lines_use_default(self):
        assert resolve_material([]).is_default

    def test_unlisted_designation_gets_generic_values(self):
        material = resolve_material(["S355"])
        assert material.designation == "S355"
        assert material.density_g_cm3 == DEFAULT_DENSITY_G_CM3
        assert material.price_per_kg == DEFAULT_PRICE_PER_KG
        assert not material.is_default

    def test_family_entry_covers_unlisted_grade(self):
        material = resolve_material(["EN AW-6061"])
        assert material.density_g_cm3 == 2.70
        assert material.price_per_kg == 4.40


class TestCatalog:

    def test_tables_are_read_only(self):
        catalog = MaterialCatalog()
        with pytest.raises(TypeError):
            catalog.densities['1.2210'] = 1.0
        with pytest.raises(TypeError):
            DENSITY_TABLE['1.2210'] = 1.0

    def test_case_insensitive_lookup(self):
        assert MaterialCatalog().lookup("almg3").density_g_cm3 == 2.66

    def test_to_rows(self):
        rows = MaterialCatalog({'A': 1.0}, {'A': 2.0, 'B': 3.0}).to_rows()
        assert rows == [
            {'designation': 'A', 'density': 1.0, 'pricePerKg': 2.0},
            {'designation': 'B', 'density': DEFAULT_DENSITY_G_CM3, 'pricePerKg': 3.0},
        ]

    def test_load_without_path_uses_builtins(self):
        catalog = load_material_catalog(None)
        assert catalog.source == "built-in"
        assert catalog.lookup("1.4301").density_g_cm3 == 7.90

    def test_load_csv_overlays_builtins(self, tmp_path):
        path = tmp_path / "materials.csv"
        path.write_text(" designation ,density,price_per_kg\n1.2210,7.80,2.10\nS355,,1.75\n", encoding="utf-8")

        catalog = load_material_catalog(str(path))

        assert catalog.source == str(path)
        assert catalog.lookup("1.2210").density_g_cm3 == 7.80
        assert catalog.lookup("1.2210").price_per_kg == 2.10
        assert catalog.lookup("S355").price_per_kg == 1.75
        assert catalog.lookup("S355").density_g_cm3 == DEFAULT_DENSITY_G_CM3
        # built-ins stay untouched
        assert DENSITY_TABLE['1.2210'] == 7.85
        assert catalog.lookup("1.4301").price_per_kg == 4.20

    def test_non_positive_values_are_ignored(self, tmp_path):
        path = tmp_path / "materials.csv"
        path.write_text("DESIGNATION,DENSITY,PRICE_PER_KG\n1.2210,7.85,-5\nC45,0,2.00\n", encoding="utf-8")

        catalog = load_material_catalog(str(path))

        assert catalog.lookup("1.2210").price_per_kg == 1.50
        assert catalog.lookup("C45").density_g_cm3 == DENSITY_TABLE['C45']
        assert catalog.lookup("C45").price_per_kg == 2.00

    def test_non_positive_price_never_yields_negative_cost(self, tmp_path):
        from drawing_analysis import analyze

        path = tmp_path / "materials.csv"
        path.write_text("DESIGNATION,DENSITY,PRICE_PER_KG\n1.2210,7.85,-5\n", encoding="utf-8")

        result = analyze("Ø25\n120\n1.2210", 1, catalog=load_material_catalog(str(path)))

        assert result.cost.material_cost > 0

    def test_missing_file_falls_back(self, tmp_path):
        catalog = load_material_catalog(str(tmp_path / "missing.csv"))
        assert catalog.source == "built-in"

    def test_sheet_without_designation_column_falls_back(self, tmp_path):
        path = tmp_path / "materials.csv"
        path.write_text("name,density\nfoo,1.0\n", encoding="utf-8")
        assert load_material_catalog(str(path)).source == "built-in"
