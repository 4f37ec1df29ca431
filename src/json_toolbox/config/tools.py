# Store for tools configuration
TOOLS = [
    {
        "id": "json-formatter",
        "name": "JSON Formatter",
        "description": "Validate, pretty print and minify JSON with error locations and hidden character detection",
        "endpoints": ["/api/json/validate", "/api/json/format"],
        "tags": ["formatter", "json", "validator", "minify"],
        "icon": "📄"
    },
    {
        "id": "json-path-query",
        "name": "JSON Path Query",
        "description": "Query JSON documents with JSONPath: wildcards, recursive descent and filters",
        "endpoints": ["/api/json/query", "/api/json/paths"],
        "tags": ["jsonpath", "query", "json", "filter"],
        "icon": "🔍"
    },
    {
        "id": "json-diff",
        "name": "JSON Diff",
        "description": "Compare two JSON documents side-by-side after normalizing their formatting",
        "endpoints": ["/api/json/diff"],
        "tags": ["diff", "compare", "json"],
        "icon": "⚖️"
    },
    {
        "id": "json-converter",
        "name": "JSON Converter",
        "description": "Convert JSON to CSV or YAML",
        "endpoints": ["/api/json/convert"],
        "tags": ["converter", "json", "csv", "yaml"],
        "icon": "🔄"
    },
    {
        "id": "json-schema",
        "name": "JSON Schema Validator",
        "description": "Validate JSON documents against a JSON Schema",
        "endpoints": ["/api/json/schema"],
        "tags": ["schema", "json", "validator"],
        "icon": "✅"
    }
]
