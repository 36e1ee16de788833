"""Default lesson topics used for dynamic commands when the host sends none."""

from voicenav.catalog.types import DynamicEntity

DEFAULT_TOPICS: tuple[DynamicEntity, ...] = (
    DynamicEntity(slug="quadratic-equations-functions", title="Quadratic Equations & Functions"),
    DynamicEntity(slug="rational-algebraic-expressions", title="Rational Algebraic Expressions"),
    DynamicEntity(slug="variation", title="Variation"),
    DynamicEntity(slug="polynomial-functions", title="Polynomial Functions"),
    DynamicEntity(slug="exponential-logarithmic-functions", title="Exponential & Logarithmic Functions"),
    DynamicEntity(slug="sequences-series", title="Sequences and Series"),
    DynamicEntity(slug="probability", title="Probability"),
    DynamicEntity(slug="statistics", title="Statistics"),
)
