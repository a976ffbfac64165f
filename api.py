from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from enumgen.errors import EnumGenError, ErrorPolicy
from enumgen.model import EmissionConfig, LineError, Symbol
from enumgen.pipeline import generate_from_text


app = FastAPI(title="Rust Enum Generator")


class GenerateRequest(BaseModel):
	text: str
	config: EmissionConfig = EmissionConfig()
	keep_going: bool = False


class GenerateResponse(BaseModel):
	code: str
	symbols: List[Symbol]
	duplicates: Dict[int, List[str]] = {}
	diagnostics: List[LineError] = []


@app.post("/generate", response_model=GenerateResponse)
def generate(req: GenerateRequest) -> GenerateResponse:
	policy = ErrorPolicy.COLLECT if req.keep_going else ErrorPolicy.FAIL_FAST
	try:
		result = generate_from_text(req.text, req.config, policy=policy, source="request")
	except EnumGenError as e:
		raise HTTPException(status_code=400, detail=str(e))

	return GenerateResponse(
		code=result.code,
		symbols=list(result.table.symbols),
		duplicates=result.table.duplicate_values(),
		diagnostics=result.diagnostics,
	)


def create_app() -> FastAPI:
	return app
