import uvicorn
from meal_scheduler.api.api_run import app
from meal_scheduler.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def main():
    # Print a friendly message that points to the API docs
    print(f"Meal Scheduler API on http://localhost:{APP_PORT}/docs (Press CTRL+C to quit)")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL)


if __name__ == "__main__":
    main()
