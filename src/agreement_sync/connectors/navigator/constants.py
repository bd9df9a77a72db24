"""Navigator API endpoints and payload keys."""

DEFAULT_BASE_URL = "https://navigator-d.docusign.com/api/v1"

AGREEMENTS_PATH = "/agreements"
AGREEMENT_DETAIL_PATH = "/agreements/{agreement_id}"

# List responses carry the records under one of these keys
LIST_KEYS = ("agreements", "data", "items")
# Detail responses are either the record itself or wrapped under this key
DETAIL_KEY = "agreement"
