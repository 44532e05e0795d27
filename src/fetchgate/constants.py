PROXY_ERROR_HEADER = "X-Fetchgate-Error"

MISSING_URL_MESSAGE = "Missing url parameter"

CATALOG_URL = (
    "https://www.skystore.com/api/web/v2/catalog/assets/top/"
    "9fe6ace0-0ba3-43d4-8ce2-8b39331244e0/new-to-buy"
)
CATALOG_API_KEY = "l_web_sparrow"
CATALOG_USER_AGENT = "Web/7.4.6"
