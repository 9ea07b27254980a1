
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from donorlink.config import LOG_LEVEL
from donorlink.database import engine, Base
from donorlink.api import admin, auth, location, navigation, profile, search
from donorlink.models import blood_bank, user  # noqa: F401  registers the tables
import logging
import uvicorn

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="DonorLink Blood Donation API")

Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api")
app.include_router(navigation.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(search.router, prefix="/api")
app.include_router(location.router, prefix="/api")

@app.get("/health")
def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
