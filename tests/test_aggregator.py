from datetime import date

from biomarker_trends.schemas.biomarker import HealthStatus, SeriesPoint, TrendDirection
from biomarker_trends.services.aggregator import aggregate
from biomarker_trends.services.name_normalizer import normalize_name


def test_name_variants_collapse_into_one_biomarker(make_result):
    results = [
        make_result("Hemoglobin", "13.0", date(2025, 1, 1)),
        make_result(" hemoglobin ", "14.0", date(2025, 2, 1)),
        make_result("HEMOGLOBIN", "14.2", date(2025, 3, 1)),
    ]

    biomarkers = aggregate(results)

    assert len(biomarkers) == 1
    hemoglobin = biomarkers[0]
    assert hemoglobin.canonical_name == "hemoglobin"
    assert hemoglobin.display_name == "HEMOGLOBIN"
    assert [p.value for p in hemoglobin.historical_series] == [13.0, 14.0, 14.2]
    assert hemoglobin.health_status == HealthStatus.OPTIMAL
    assert hemoglobin.trend_direction == TrendDirection.UP
    assert hemoglobin.trend_magnitude_text == "0.2"
    assert hemoglobin.trend_percentage_text == "1%"
    assert hemoglobin.sample_count == 3


def test_latest_result_seeds_the_record(make_result):
    results = [
        make_result("Glucose", "110", date(2025, 3, 1), unit="mg/dL", reference_range="70-99",
                    is_abnormal=True, category="Chemistry"),
        make_result("glucose", "95", date(2025, 1, 1), unit="mmol/L", reference_range="3.9-5.5",
                    category="Metabolic"),
    ]

    glucose = aggregate(results)[0]

    assert glucose.display_name == "Glucose"
    assert glucose.current_value_text == "110"
    assert glucose.unit == "mg/dL"
    assert glucose.reference_range_text == "70-99"
    assert glucose.category == "Chemistry"
    assert glucose.latest_date == date(2025, 3, 1)
    assert glucose.health_status == HealthStatus.CRITICAL


def test_non_numeric_values_are_dropped_from_series(make_result):
    results = [
        make_result("Ferritin", "12.0", date(2025, 1, 1)),
        make_result("Ferritin", "n/a", date(2025, 2, 1)),
        make_result("Ferritin", "13.0", date(2025, 3, 1)),
    ]

    ferritin = aggregate(results)[0]

    assert ferritin.historical_series == [
        SeriesPoint(report_date=date(2025, 1, 1), value=12.0),
        SeriesPoint(report_date=date(2025, 3, 1), value=13.0),
    ]
    assert ferritin.sample_count == 3


def test_underscored_values_are_not_numeric(make_result):
    results = [
        make_result("Ferritin", "1_0", date(2025, 1, 1)),
        make_result("Ferritin", "2_0", date(2025, 2, 1)),
    ]

    ferritin = aggregate(results)[0]

    assert ferritin.historical_series == []
    assert ferritin.current_value_text == "2_0"
    assert ferritin.trend_magnitude_text == "No comparison"


def test_non_numeric_latest_value_is_kept_as_text(make_result):
    results = [
        make_result("Culture", "5", date(2025, 1, 1)),
        make_result("Culture", "Negative", date(2025, 2, 1)),
    ]

    culture = aggregate(results)[0]

    assert culture.current_value_text == "Negative"
    assert culture.latest_date == date(2025, 2, 1)
    assert len(culture.historical_series) == 1
    assert culture.trend_magnitude_text == "No comparison"
    assert culture.trend_percentage_text == "--"


def test_missing_fields_use_defaults(make_result):
    result = make_result("Vitamin D", None, date(2025, 1, 1), unit=None, reference_range=None, category=None)

    vitamin = aggregate([result])[0]

    assert vitamin.current_value_text == ""
    assert vitamin.unit == ""
    assert vitamin.reference_range_text == ""
    assert vitamin.category == "General"
    assert vitamin.historical_series == []
    assert vitamin.health_status == HealthStatus.GOOD


def test_results_without_name_are_excluded(make_result, caplog):
    results = [
        make_result("Sodium", "140", date(2025, 1, 1)),
        make_result("", "1", date(2025, 1, 1)),
        make_result(None, "2", date(2025, 1, 1)),
        make_result("   ", "3", date(2025, 1, 1)),
    ]

    with caplog.at_level("WARNING"):
        biomarkers = aggregate(results)

    assert [b.canonical_name for b in biomarkers] == ["sodium"]
    assert "without a test name" in caplog.text


def test_one_record_per_distinct_normalized_name(make_result):
    names = ["TSH", "tsh", "Free T4", "FREE T4 ", "LDL", "Ldl", "HDL", ""]
    results = [make_result(name, "1.0", date(2025, 1, i + 1)) for i, name in enumerate(names)]

    biomarkers = aggregate(results)

    canonical = [b.canonical_name for b in biomarkers]
    expected = {normalize_name(name) for name in names} - {None}
    assert len(canonical) == len(set(canonical))
    assert set(canonical) == expected


def test_series_is_ordered_by_date(make_result):
    results = [
        make_result("Platelets", "300", date(2025, 5, 1)),
        make_result("Platelets", "250", date(2024, 11, 1)),
        make_result("Platelets", "280", date(2025, 1, 15)),
        make_result("Platelets", "260", date(2025, 1, 15)),
    ]

    series = aggregate(results)[0].historical_series

    dates = [p.report_date for p in series]
    assert dates == sorted(dates)
    assert [p.value for p in series] == [250.0, 280.0, 260.0, 300.0]


def test_same_date_tie_keeps_input_order(make_result):
    # Stable sort: the result listed last for the latest date is the latest.
    first = make_result("Potassium", "4.0", date(2025, 1, 1), is_abnormal=False)
    second = make_result("POTASSIUM", "5.6", date(2025, 1, 1), is_abnormal=True)

    forward = aggregate([first, second])[0]
    backward = aggregate([second, first])[0]

    assert forward.current_value_text == "5.6"
    assert forward.display_name == "POTASSIUM"
    assert forward.health_status == HealthStatus.CRITICAL
    assert backward.current_value_text == "4.0"
    assert backward.health_status == HealthStatus.GOOD


def test_aggregate_is_idempotent_and_does_not_mutate_input(make_result):
    results = [
        make_result("Creatinine", "0.9", date(2025, 2, 1)),
        make_result("Creatinine", "1.1", date(2025, 1, 1)),
        make_result("Albumin", "4.2", date(2025, 1, 1)),
    ]
    snapshot = list(results)

    first = aggregate(results)
    second = aggregate(results)

    assert results == snapshot
    assert sorted(first, key=lambda b: b.canonical_name) == sorted(second, key=lambda b: b.canonical_name)
    assert first[0] is not second[0]


def test_empty_input_yields_nothing():
    assert aggregate([]) == []


def test_accepts_any_iterable(make_result):
    generator = (make_result("Iron", v, date(2025, 1, i + 1)) for i, v in enumerate(["80", "90"]))

    iron = aggregate(generator)[0]

    assert iron.sample_count == 2
    assert iron.trend_direction == TrendDirection.UP
