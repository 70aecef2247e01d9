from fastapi import FastAPI, HTTPException, Request

from shapeminer.router import route
from shapeminer.utils.exceptions import ShapeMinerError

app = FastAPI(
    title="Shapeminer",
    version="1.0.0"
)

@app.post("/synthesize-schema")
def synthesize_schema(payload: dict, request: Request):
    try:
        return route(payload, dict(request.headers))
    except (ShapeMinerError, ValueError) as e:
        # Declaration or input problems -> client error, not server crash
        raise HTTPException(
            status_code=422,
            detail={"status": "ERROR", "message": str(e)},
        )
