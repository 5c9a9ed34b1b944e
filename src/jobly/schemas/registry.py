"""Schema registry mapping logical names to files under schemas/json/."""

SCHEMA_REGISTRY: dict[str, str] = {
    # Jobs
    "job-new": "job-new.schema.json",
    "job-update": "job-update.schema.json",
    "job-search": "job-search.schema.json",
    # Companies
    "company-new": "company-new.schema.json",
    "company-update": "company-update.schema.json",
    "company-search": "company-search.schema.json",
}
