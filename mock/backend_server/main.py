from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Business Backend", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/backend_stub") if os.path.exists("/backend_stub") else Path(__file__).resolve().parents[1] / "backend_stub"


def _load(business_id: int) -> dict:
    file = DATA_DIR / f"business_{business_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="business not found")
    return json.loads(file.read_text())


def _envelope(data) -> JSONResponse:
    return JSONResponse(content={"success": True, "data": data})


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/api/businesses/{business_id}")
def get_business(business_id: int):
    return _envelope(_load(business_id)["business"])

@app.get("/api/categories/business/{business_id}")
def get_categories(business_id: int):
    return _envelope(_load(business_id)["categories"])

@app.get("/api/transaction/business/{business_id}")
def get_transactions(business_id: int):
    return _envelope(_load(business_id)["transactions"])

@app.get("/api/scenario/business/{business_id}")
def get_scenarios(business_id: int):
    return _envelope(_load(business_id)["scenarios"])
