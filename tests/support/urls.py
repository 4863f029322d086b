GRAPH_URL = "https://graph.example.test"
TENANT_URL = "https://contoso.sharepoint.com"
ADMIN_URL = "https://contoso-admin.sharepoint.com"

UNITS_PATH = "/v1.0/directory/administrativeUnits"
CONTEXT_INFO_PATH = "/_api/contextinfo"
PROCESS_QUERY_PATH = "/_vti_bin/client.svc/ProcessQuery"
