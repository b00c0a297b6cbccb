from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from custom_proxy.api.deps import lifespan
from custom_proxy.api.errors import register_error_handlers
from custom_proxy.api.routers import blob, sql, meta
from custom_proxy.config import API_ROUTE_PREFIX, CORS_ALLOW_ORIGINS


# Initialize FastAPI app
app = FastAPI(
    title="Storage and SQL Proxy API",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routers
app.include_router(meta.router, prefix="/meta", tags=["Meta"])
app.include_router(blob.router, prefix=f"{API_ROUTE_PREFIX}/blob", tags=["Blob"])
app.include_router(sql.router, prefix=API_ROUTE_PREFIX, tags=["SQL"])

@app.get("/")
async def root():
    return {"msg": "Storage and SQL Proxy API is running"}
