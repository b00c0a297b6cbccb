import azure.functions as func

from custom_proxy.api.main import app as fastapi_app

# Function-level auth: callers must present a function key (x-functions-key or ?code=)
app = func.AsgiFunctionApp(app=fastapi_app, http_auth_level=func.AuthLevel.FUNCTION)
