"""File names and markers used by conceptual content."""

SUMMARY_FILE = "summary.md"
USAGE_FILE = "usage.md"
EXAMPLES_FILE = "examples.md"
BEST_PRACTICES_FILE = "best-practices.md"
PATTERNS_FILE = "patterns.md"
CONSIDERATIONS_FILE = "considerations.md"
RELATED_APIS_FILE = "related-apis.md"
PARAMETER_FILE_PREFIX = "param-"
PARAMETER_FILE_EXTENSION = ".md"

# Conceptual file -> DocEntity attribute, in load order.
CONCEPTUAL_FILES = {
    SUMMARY_FILE: "summary",
    USAGE_FILE: "usage",
    EXAMPLES_FILE: "examples",
    BEST_PRACTICES_FILE: "best_practices",
    PATTERNS_FILE: "patterns",
    CONSIDERATIONS_FILE: "considerations",
}

PLACEHOLDER_MARKER = "<!-- TODO: REMOVE THIS COMMENT AFTER YOU CUSTOMIZE THIS CONTENT -->"

GLOBAL_NAMESPACE_NAME = "global"
