from fastapi import FastAPI

from .api.endpoints import router

app = FastAPI(title="Mobile Lookup")
app.include_router(router)


@app.get("/")
def home():
    return {"message": "Upload a spreadsheet, search mobile numbers, export the matches."}
