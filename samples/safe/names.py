ADMINISTRATOR_ROLE = "Administrator"
TENANT_CLAIM = "tenant_id"
USERS_WRITE = "users:write"
