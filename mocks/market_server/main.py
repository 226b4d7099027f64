import random

from fastapi import FastAPI, HTTPException

app = FastAPI(title="Mock Market Data Server", version="1.0.0")

# Annual percentage rates by term (months)
MARKET_RATES = {"3": 5.25, "6": 5.75, "12": 6.25, "24": 6.75, "36": 7.25, "48": 7.75, "60": 8.25}

rng = random.Random()

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/market/rates")
def get_market_rates():
    return {"rates": MARKET_RATES}

@app.get("/credit/score")
def get_credit_score(user_id: str):
    if not user_id:
        raise HTTPException(status_code=400, detail="user_id required")
    return {"user_id": user_id, "credit_score": rng.randint(300, 850)}

@app.get("/bank/verification")
def verify_bank_account(account_number: str):
    # ~90% of accounts verify
    return {"account_number": account_number, "verified": rng.random() < 0.9}

@app.get("/economy/indicators")
def get_economic_indicators():
    return {
        "inflation": round(2 + rng.random() * 3, 1),
        "unemployment": round(3 + rng.random() * 4, 1),
        "gdp_growth": round(1 + rng.random() * 3, 1),
    }
