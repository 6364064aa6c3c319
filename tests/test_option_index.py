from pricing.data_models import Row
from pricing.option_index import build_option_index, parse_year, unique_sorted


def _rows():
    return [
        Row(name="Swift", company="Maruti", year="2015", fuel_type="Petrol"),
        Row(name="City", company="Honda", year="2018", fuel_type="Diesel"),
    ]


def test_worked_example():
    index = build_option_index(_rows())
    assert index.companies == ("Honda", "Maruti")
    assert index.years == ("2018", "2015")
    assert index.models_by_company["Maruti"] == ("Swift",)
    assert index.fuel_types == ("Diesel", "Petrol")


def test_trims_deduplicates_and_drops_empty_values():
    rows = [
        Row(name=" Swift ", company=" Maruti", year="2015", fuel_type="Petrol "),
        Row(name="Swift", company="Maruti  ", year=2015, fuel_type="Petrol"),
        Row(name="Alto", company="", year="", fuel_type="   "),
        Row(name="", company="Hyundai", year="n/a", fuel_type="CNG"),
    ]
    index = build_option_index(rows)
    assert index.companies == ("Hyundai", "Maruti")
    assert index.fuel_types == ("CNG", "Petrol")
    assert index.years == ("2015",)
    assert index.models_by_company == {"Maruti": ("Swift",)}


def test_rows_missing_company_or_model_are_not_attributed():
    rows = [
        Row(name="Alto", company=""),
        Row(name="", company="Tata"),
        Row(name="Nexon", company="Tata"),
    ]
    index = build_option_index(rows)
    assert index.models_by_company == {"Tata": ("Nexon",)}
    assert "Alto" not in [m for models in index.models_by_company.values() for m in models]


def test_years_strictly_descending_and_parsed_like_parse_int():
    rows = [
        Row(year="2012"),
        Row(year=2019),
        Row(year=" 2015 "),
        Row(year="2012.0"),
        Row(year="abc"),
        Row(year=""),
        Row(year="2019"),
    ]
    index = build_option_index(rows)
    assert index.years == ("2019", "2015", "2012")
    as_ints = [int(y) for y in index.years]
    assert all(a > b for a, b in zip(as_ints, as_ints[1:]))


def test_models_sorted_per_company():
    rows = [
        Row(name="Verna", company="Hyundai"),
        Row(name="creta", company="Hyundai"),
        Row(name="Creta", company="Hyundai"),
        Row(name="i20", company="Hyundai"),
    ]
    index = build_option_index(rows)
    assert index.models_by_company["Hyundai"] == ("creta", "Creta", "i20", "Verna")


def test_models_for_unknown_or_unset_company():
    index = build_option_index(_rows())
    assert index.models_for("") == ()
    assert index.models_for("Tesla") == ()
    assert index.models_for("Honda") == ("City",)


def test_empty_rows_give_empty_index():
    index = build_option_index([])
    assert index.companies == ()
    assert index.fuel_types == ()
    assert index.years == ()
    assert index.models_by_company == {}


def test_builder_is_deterministic():
    rows = _rows()
    assert build_option_index(rows) == build_option_index(list(rows))


def test_unique_sorted_and_parse_year_helpers():
    assert unique_sorted(["b", " a", "b ", "", None, 3]) == ["3", "a", "b"]
    assert parse_year("2017") == 2017
    assert parse_year("  -5x") == -5
    assert parse_year("x2017") is None
    assert parse_year(None) is None
    assert parse_year(True) is None
    assert parse_year(float("nan")) is None
