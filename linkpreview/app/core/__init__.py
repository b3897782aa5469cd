SERVICE_NAME = "link-preview-api"
