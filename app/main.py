import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import LOG_LEVEL
from app.helpers.submission_errors import ResultLinkError, StorageError
from app.routes.quiz_submission import router as quiz_submission_router
from app.routes.result import router as result_router

# ---------------------------
# Logging
# ---------------------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("quiz")


app=FastAPI(
    title="Quiz Scoring Service"
)

@app.get("/")
def root():
    return {
        "message":"Quiz Scoring Service is Running!"
        }


# ---------------------------
# Exception handlers
# ---------------------------
@app.exception_handler(ResultLinkError)
async def result_link_exception_handler(request: Request, exc: ResultLinkError):
    logger.error("Partial submission on %s: result %s is not linked", request.url.path, exc.result_id)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Result saved but not linked, retry linking",
            "result_id": str(exc.result_id),
        },
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is unavailable, try again later"},
    )


app.include_router(quiz_submission_router)
app.include_router(result_router)
