from fastapi import FastAPI, UploadFile, File, HTTPException
from .models import ColumnsResponse, ConvertResponse, HealthResponse
from .convert import convert_bytes, to_response
from .normalize import MissingHeaderError
from .sources import UnreadableFileError, UnsupportedFileError, check_supported

app = FastAPI(
    title="excel2vcard",
    description="Deterministic spreadsheet-to-vCard conversion, one card per row",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.get("/columns", response_model=ColumnsResponse)
def columns():
    return ColumnsResponse()

@app.post("/convert", response_model=ConvertResponse)
async def convert(file: UploadFile = File(...), escape: bool = False):
    filename = file.filename or ""
    try:
        check_supported(filename)
    except UnsupportedFileError as e:
        raise HTTPException(status_code=422, detail=str(e))

    raw = await file.read()
    try:
        result = convert_bytes(raw, filename, escape=escape)
    except (MissingHeaderError, UnsupportedFileError, UnreadableFileError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return to_response(result)
