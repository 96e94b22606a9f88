from contextlib import asynccontextmanager
from fastapi import FastAPI
from shop_qrcodes.api.qrcodes import router as qrcodes_router
from shop_qrcodes.core.database import engine
from shop_qrcodes.core.logger import logger
from shop_qrcodes.models.qr_code import create_tables


@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Create database tables on startup."""
	create_tables(engine)
	logger.info("Database tables created (if not existing) at %s", engine.url)
	yield

app = FastAPI(title="Shop QR Codes", lifespan=lifespan)
app.include_router(qrcodes_router)
if __name__ == "__main__":
	import uvicorn
	uvicorn.run("shop_qrcodes.main:app", host="0.0.0.0", port=8000, reload=True)
