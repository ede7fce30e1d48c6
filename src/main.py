import os
from fastapi import FastAPI
from fastapi.logger import logger
from fastapi.middleware.cors import CORSMiddleware
from src.api.routes import api_router

# Verbosity of the application logger (workflow milestones are INFO)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

app = FastAPI(
    title="Rentledger",
    description="Lease contracts, rent periods and payment reconciliation",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add all endpoints from the API with an "api" prefix
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check():
    return {"status": "healthy", "version": app.version}


# this only runs if `$ python src/main.py` is executed
if __name__ == '__main__':
    import uvicorn
    PORT = int(os.environ.get('PORT', 3001))
    uvicorn.run("src.main:app", host='0.0.0.0', port=PORT, reload=True)
