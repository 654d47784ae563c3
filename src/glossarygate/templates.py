"""Default files written by 'glossarygate init'."""

DEFAULT_CONFIG_YAML = """\
# GlossaryGate configuration
# Strings must use single quotes.

# Keys ending in ':fx' use the free API endpoint.
# Leave empty to read the key from the DEEPL_AUTH_KEY environment variable.
authentication_key: ''

base_uri: 'https://api.deepl.com/v2/'
base_uri_free: 'https://api-free.deepl.com/v2/'

# Sent with every translate request. Masked terms are wrapped in <ignore> tags.
default_options:
  tag_handling: 'xml'
  ignore_tags: 'ignore'

# Regular expressions of terms that must never be translated (case-insensitive).
ignored_terms: []

# Language pairs offered for glossaries.
language_pairs:
  - source: 'EN'
    target: 'DE'
  - source: 'DE'
    target: 'EN'

# Request timeout in seconds. Use null to wait indefinitely.
timeout: 30

# Language by which glossary entries are ordered.
sort_by_language: 'EN'
"""

DEFAULT_GLOSSARY_YAML = """\
# GlossaryGate glossary entries
# Each aggregate holds one term per language. 'glossarygate sync' builds one
# DeepL glossary per configured pair from the aggregates having both languages.

entries:
  example:
    EN: 'Editor'
    DE: 'Redakteur'
"""
