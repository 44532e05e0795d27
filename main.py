from dotenv import load_dotenv

# ConfigManager reads the environment at import time
load_dotenv()

from fastapi import FastAPI  # noqa: E402
from mangum import Mangum  # noqa: E402

from fetchgate import FetchGate  # noqa: E402


fetchgate = FetchGate()
app = FastAPI()


fetchgate.to_fastapi(app)


handler = Mangum(app)
