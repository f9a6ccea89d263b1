from fastapi import APIRouter

app = APIRouter()


@app.get("/health", response_model=dict)
async def health():
    return {"status": "ok"}
