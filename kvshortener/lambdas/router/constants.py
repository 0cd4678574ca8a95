# Structured log events emitted by the router Lambda
CLIENT_ERROR = 'CLIENT_ERROR'
SERVER_ERROR = 'SERVER_ERROR'
REQUEST_HANDLED = 'REQUEST_HANDLED'
MALFORMED_EVENT = 'MALFORMED_EVENT'
UNKNOWN_BACKEND = 'UNKNOWN_BACKEND'
