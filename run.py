"""Application entry point.

Runs the Workout Tracker API under uvicorn with auto-reload for local development.
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="localhost", port=8000, reload=True)
