from typing import Annotated
from fastapi import Path
from fastapi.responses import JSONResponse

from sensordata.utils.validation import MIN_CHIP_ID, MAX_CHIP_ID

def or_not_found(result):
    """Pass successful results through; turn not-found results into a 404 with the same body"""
    if not result["success"]:
        return JSONResponse(status_code=404, content=result)
    return result

# path parameter for chip ids; out of range values are rejected with a 422
ChipIdPath = Annotated[int, Path(ge=MIN_CHIP_ID, le=MAX_CHIP_ID)]
