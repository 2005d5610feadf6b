from typing import Callable

DEFAULT_DESCRIPTION = "General lab test"


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda name: any(keyword in name for keyword in keywords)


# Evaluated in order, first match wins. "fasting glucose" contains "ast", so
# blood sugar must stay ahead of liver function.
DESCRIPTION_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_contains_any("hemoglobin", "hematocrit", "rbc", "red blood"), "Red blood cells"),
    (_contains_any("wbc", "white blood", "neutrophil", "lymphocyte"), "White blood cells"),
    (_contains_any("platelet", "plt"), "Platelets"),
    (_contains_any("glucose", "sugar"), "Blood sugar"),
    (_contains_any("cholesterol", "hdl", "ldl", "triglyceride"), "Lipids"),
    (_contains_any("liver", "alt", "ast", "bilirubin"), "Liver function"),
    (_contains_any("kidney", "creatinine", "urea", "bun"), "Kidney function"),
    (_contains_any("thyroid", "tsh", "t3", "t4"), "Thyroid function"),
    (_contains_any("pressure", "bp"), "Blood pressure"),
]


def describe_biomarker(test_name: str | None) -> str:
    if not test_name:
        return DEFAULT_DESCRIPTION
    name = test_name.lower()
    for matches, description in DESCRIPTION_RULES:
        if matches(name):
            return description
    return DEFAULT_DESCRIPTION
