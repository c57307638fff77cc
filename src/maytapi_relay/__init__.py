from dotenv import load_dotenv

# Pick up MAYTAPI_* credentials from a local .env before any settings are read
load_dotenv()
