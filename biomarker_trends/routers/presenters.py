from biomarker_trends.schemas.biomarker import AggregatedBiomarker, BiomarkerItem, ReferenceBounds
from biomarker_trends.services.descriptors import describe_biomarker
from biomarker_trends.services.range_parser import parse_range


def to_item(biomarker: AggregatedBiomarker) -> BiomarkerItem:
    # Aggregated records carry no identity of their own; the canonical name is stable across calls.
    bounds = parse_range(biomarker.reference_range_text)
    return BiomarkerItem(
        id=biomarker.canonical_name,
        biomarker=biomarker,
        description=describe_biomarker(biomarker.display_name),
        reference_bounds=ReferenceBounds(min=bounds.min, max=bounds.max) if bounds else None,
    )
