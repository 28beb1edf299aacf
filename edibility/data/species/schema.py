"""Species table column names and category levels."""

__all__ = [
    "ID_COLUMN",
    "DEFINITION_COLUMN",
    "ETHNO_REPORTS_COLUMN",
    "TOXICITY_COLUMN",
    "PROCESSING_COLUMN",
    "OUTCOME_COLUMN",
    "COLUMNS",
    "DEFINITION_LEVELS",
    "PROCESSING_LEVELS",
    "CATEGORY_LEVELS",
]

ID_COLUMN = "species_id"
DEFINITION_COLUMN = "definition"
ETHNO_REPORTS_COLUMN = "ethno_reports"
TOXICITY_COLUMN = "toxicity"
PROCESSING_COLUMN = "processing"
OUTCOME_COLUMN = "edible"

COLUMNS = (
    ID_COLUMN,
    DEFINITION_COLUMN,
    ETHNO_REPORTS_COLUMN,
    TOXICITY_COLUMN,
    PROCESSING_COLUMN,
    OUTCOME_COLUMN,
)

# First level is the reference level for treatment coding
DEFINITION_LEVELS = ("Raw", "Partial", "Processed")
PROCESSING_LEVELS = ("None", "Cooked", "Processed")

CATEGORY_LEVELS: dict[str, tuple[str, ...]] = {
    DEFINITION_COLUMN: DEFINITION_LEVELS,
    PROCESSING_COLUMN: PROCESSING_LEVELS,
}
