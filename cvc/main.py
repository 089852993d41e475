from fastapi import FastAPI, UploadFile, File, Query
from .models import EolConvention, HealthResponse, ValidateResponse, ValidatorConfig
from .rules import VERSION
from .validate import render_diagnostics, validate_bytes

app = FastAPI(
    title="cvc",
    description="Character set and EOL validation for C/C++ source code",
    version=VERSION,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/validate", response_model=ValidateResponse)
async def validate_file(
    file: UploadFile = File(...),
    eol: EolConvention = Query(EolConvention.NA),
    ff: bool = Query(False, description="Permit form feed character"),
    vt: bool = Query(False, description="Permit vertical tab character"),
    apa: bool = Query(False, description="Permit all printable ASCII characters"),
    noht: bool = Query(False, description="Forbid horizontal tab character"),
):
    config = ValidatorConfig(
        eol=eol,
        permit_ff=ff,
        permit_vt=vt,
        forbid_ht=noht,
        permit_all_printable=apa,
        verbose=True,
    )

    raw = await file.read()
    report = validate_bytes(raw, config)
    return ValidateResponse(
        filename=file.filename,
        report=report,
        diagnostics=render_diagnostics(report.violations),
    )
