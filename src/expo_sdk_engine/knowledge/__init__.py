"""Static domain knowledge used to enrich aggregated module records."""
