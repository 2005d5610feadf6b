from biomarker_trends.services.descriptors import DEFAULT_DESCRIPTION, describe_biomarker


def test_describe_known_biomarkers():
    assert describe_biomarker("Hemoglobin") == "Red blood cells"
    assert describe_biomarker("White Blood Cell Count") == "White blood cells"
    assert describe_biomarker("Platelets") == "Platelets"
    assert describe_biomarker("HDL Cholesterol") == "Lipids"
    assert describe_biomarker("Total Bilirubin") == "Liver function"
    assert describe_biomarker("Creatinine") == "Kidney function"
    assert describe_biomarker("TSH") == "Thyroid function"
    assert describe_biomarker("Blood Pressure") == "Blood pressure"


def test_first_matching_rule_wins():
    # "fasting" contains "ast" but blood sugar is checked first.
    assert describe_biomarker("Fasting Glucose") == "Blood sugar"
    # "hemoglobin" outranks the blood sugar rule for HbA1c style names.
    assert describe_biomarker("Glycated Hemoglobin") == "Red blood cells"


def test_unknown_or_missing_names_fall_back():
    assert describe_biomarker("Vitamin D") == DEFAULT_DESCRIPTION
    assert describe_biomarker("") == DEFAULT_DESCRIPTION
    assert describe_biomarker(None) == DEFAULT_DESCRIPTION
