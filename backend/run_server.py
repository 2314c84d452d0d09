import sys
import os
import uvicorn

# Add current directory to sys.path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    uvicorn.run("pawpost.main:app", host="0.0.0.0", port=8000, reload=False)
