"""Unit tests for loan recommendation logic"""

import logging
import pytest
from lendmatch_gateway.domain.amortization import calculate_loan_payments
from lendmatch_gateway.domain.recommendation import (
    build_recommendation,
    calculate_confidence_score,
    calculate_recommended_rate,
    find_best_loan_term,
    generate_loan_recommendations,
    generate_recommendation_reasoning,
)
from lendmatch_gateway.domain.exceptions import InvalidProfileError

MARKET_RATES = {3: 5.25, 6: 5.75, 12: 6.25, 24: 6.75, 36: 7.25, 48: 7.75, 60: 8.25}


def test_find_best_loan_term_requested_available(make_borrower, make_lender):
    """Test requested term wins when offered"""
    assert find_best_loan_term(make_borrower(loan_term=24), make_lender(loan_terms=(12, 24))) == 24


def test_find_best_loan_term_closest(make_borrower, make_lender):
    """Test 6 months requested, 12 (distance 6) beats 24 (distance 18)"""
    assert find_best_loan_term(make_borrower(loan_term=6), make_lender(loan_terms=(12, 24))) == 12


def test_find_best_loan_term_tie_uses_lender_order(make_borrower, make_lender):
    """Test equal distance keeps the lender's first listed term"""
    borrower = make_borrower(loan_term=18)

    assert find_best_loan_term(borrower, make_lender(loan_terms=(12, 24))) == 12
    assert find_best_loan_term(borrower, make_lender(loan_terms=(24, 12))) == 24


def test_find_best_loan_term_no_terms(make_borrower, make_lender):
    """Test lender without terms cannot be priced"""
    with pytest.raises(InvalidProfileError):
        find_best_loan_term(make_borrower(), make_lender(loan_terms=()))


def test_calculate_recommended_rate_low_risk(make_borrower, make_lender):
    """Test low risk prices at 90% of the higher of market and base"""
    borrower = make_borrower(credit_score=700).with_risk_score(20)

    # max(6.25 * 0.9, 8 * 0.9) = 7.2
    assert calculate_recommended_rate(borrower, make_lender(interest_rate=8.0), 6.25) == 7.2


def test_calculate_recommended_rate_high_risk_with_weak_credit(make_borrower, make_lender):
    """Test high risk premium plus the sub-650 credit surcharge"""
    borrower = make_borrower(credit_score=640).with_risk_score(70)

    # max(6.25 * 1.2, 8 * 1.1) + 0.5 = 9.3
    assert calculate_recommended_rate(borrower, make_lender(interest_rate=8.0), 6.25) == 9.3


def test_calculate_recommended_rate_medium_risk_with_strong_credit(make_borrower, make_lender):
    """Test medium tier tracks market and strong credit takes 0.5 off"""
    borrower = make_borrower(credit_score=760).with_risk_score(45)

    # max(10 * 1.05, 8) - 0.5 = 10.0
    assert calculate_recommended_rate(borrower, make_lender(interest_rate=8.0), 10.0) == 10.0


def test_calculate_recommended_rate_unassessed_uses_medium_tier(make_borrower, make_lender):
    """Test unassessed borrower is priced as medium risk"""
    borrower = make_borrower(credit_score=700)

    # max(6.25 * 1.05, 8) = 8.0
    assert calculate_recommended_rate(borrower, make_lender(interest_rate=8.0), 6.25) == 8.0


def test_calculate_recommended_rate_bounds(make_borrower, make_lender):
    """Test rate stays within 80% of market and 150% of base"""
    # max(10 * 1.2, 4 * 1.1) = 12, capped at 4 * 1.5
    risky = make_borrower(credit_score=700).with_risk_score(70)
    assert calculate_recommended_rate(risky, make_lender(interest_rate=4.0), 10.0) == 6.0

    # max(4 * 0.9, 3 * 0.9) - 0.5 = 3.1, floored at 4 * 0.8
    prime = make_borrower(credit_score=800).with_risk_score(20)
    assert calculate_recommended_rate(prime, make_lender(interest_rate=3.0), 4.0) == 3.2


def test_calculate_confidence_score(make_borrower, make_lender):
    """Test confidence adjustments and clamping"""
    lender = make_lender(interest_rate=8.0)

    # 70 + 10 (rate close) + 15 (low risk) + 10 (credit > 750), capped
    prime = make_borrower(credit_score=800).with_risk_score(20)
    assert calculate_confidence_score(prime, lender, 7.5) == 100

    # 70 - 10 (rate far) - 15 (high risk) - 10 (credit < 600)
    subprime = make_borrower(credit_score=580).with_risk_score(70)
    assert calculate_confidence_score(subprime, lender, 12.0) == 35

    # 70 + 10, no risk adjustment without a score
    unassessed = make_borrower(credit_score=700)
    assert calculate_confidence_score(unassessed, lender, 8.0) == 80

    # Rate diff between 1 and 3 leaves the base alone
    assert calculate_confidence_score(unassessed, lender, 10.0) == 70


def test_generate_recommendation_reasoning_bands(make_borrower):
    """Test reasoning text per confidence band"""
    borrower = make_borrower()

    assert generate_recommendation_reasoning(borrower, 7.2, 12, 80).startswith("Highly confident")
    assert "12-month term with 7.2%" in generate_recommendation_reasoning(borrower, 7.2, 12, 60)
    assert generate_recommendation_reasoning(borrower, 7.2, 12, 59).startswith("This recommendation comes")


def test_generate_loan_recommendations_scenario(make_borrower, make_lender):
    """Test one eligible pair priced end to end"""
    borrower = make_borrower(loan_amount=5000, loan_term=6, credit_score=700).with_risk_score(20)
    lender = make_lender(interest_rate=8.0, loan_terms=(12, 24))

    recommendations = generate_loan_recommendations([borrower], [lender], MARKET_RATES)

    assert len(recommendations) == 1
    rec = recommendations[0]
    expected = calculate_loan_payments(5000, 7.2, 12)
    assert rec.recommended_term == 12
    assert rec.recommended_interest_rate == 7.2
    assert rec.estimated_monthly_payment == expected.monthly_payment
    assert rec.total_interest_paid == expected.total_interest
    # 70 + 10 (|7.2 - 8| < 1) + 15 (low risk)
    assert rec.confidence_score == 95


def test_generate_loan_recommendations_market_rate_fallback(make_borrower, make_lender):
    """Test missing term in market table prices off the lender's base rate"""
    borrower = make_borrower(credit_score=700).with_risk_score(20)
    lender = make_lender(interest_rate=8.0, loan_terms=(12,))

    recommendations = generate_loan_recommendations([borrower], [lender], {})

    # max(8 * 0.9, 8 * 0.9)
    assert recommendations[0].recommended_interest_rate == 7.2


def test_generate_loan_recommendations_applies_risk_tolerance(make_borrower, make_lender):
    """Test recommender uses the same four-condition filter as matching"""
    borrower = make_borrower().with_risk_score(60)
    lender = make_lender(max_risk_tolerance=50)

    assert generate_loan_recommendations([borrower], [lender], MARKET_RATES) == []


def test_generate_loan_recommendations_properties(make_borrower, make_lender):
    """Test term membership and amortization round-trip on every output"""
    borrowers = [
        make_borrower(id="b-1", loan_amount=3000, loan_term=3, credit_score=780).with_risk_score(12),
        make_borrower(id="b-2", loan_amount=15000, loan_term=60, credit_score=660).with_risk_score(48),
        make_borrower(id="b-3", loan_amount=9000, loan_term=30, credit_score=720),
    ]
    lenders = [
        make_lender(id="l-1", amount_to_lend=50000, loan_terms=(6, 36, 48)),
        make_lender(id="l-2", amount_to_lend=20000, interest_rate=12.5, loan_terms=(24,)),
    ]
    amounts = {b.id: b.loan_amount for b in borrowers}
    terms = {lender.id: lender.loan_terms for lender in lenders}

    recommendations = generate_loan_recommendations(borrowers, lenders, MARKET_RATES)

    assert len(recommendations) == 6
    for rec in recommendations:
        assert rec.recommended_term in terms[rec.lender_id]
        assert 0 <= rec.confidence_score <= 100
        round_trip = rec.estimated_monthly_payment * rec.recommended_term - amounts[rec.borrower_id]
        assert abs(round_trip - rec.total_interest_paid) <= 0.01


def test_generate_loan_recommendations_order_and_idempotence(make_borrower, make_lender):
    """Test borrower-then-lender order and repeatable output"""
    borrowers = [make_borrower(id="b-1"), make_borrower(id="b-2")]
    lenders = [make_lender(id="l-1"), make_lender(id="l-2")]

    first = generate_loan_recommendations(borrowers, lenders, MARKET_RATES)
    second = generate_loan_recommendations(borrowers, lenders, MARKET_RATES)

    assert [(r.borrower_id, r.lender_id) for r in first] == [
        ("b-1", "l-1"),
        ("b-1", "l-2"),
        ("b-2", "l-1"),
        ("b-2", "l-2"),
    ]
    assert first == second


def test_generate_loan_recommendations_skips_failing_pair(make_borrower, make_lender, caplog):
    """Test a lender with no terms is logged and skipped"""
    broken = make_lender(id="l-broken", loan_terms=())

    with caplog.at_level(logging.WARNING):
        recommendations = generate_loan_recommendations([make_borrower()], [broken, make_lender()], MARKET_RATES)

    assert [r.lender_id for r in recommendations] == ["l-1"]
    assert "Skipping pair during recommendation" in caplog.text


def test_generate_loan_recommendations_skips_missing_lookup(make_borrower, make_lender, monkeypatch, caplog):
    """Test a KeyError on one pair does not abort the remaining pairs"""
    original = build_recommendation

    def build_or_fail(borrower, lender, market_rates):
        if lender.id == "l-broken":
            raise KeyError(lender.id)
        return original(borrower, lender, market_rates)

    monkeypatch.setattr("lendmatch_gateway.domain.recommendation.build_recommendation", build_or_fail)

    with caplog.at_level(logging.WARNING):
        recommendations = generate_loan_recommendations(
            [make_borrower()], [make_lender(id="l-broken"), make_lender()], MARKET_RATES
        )

    assert [r.lender_id for r in recommendations] == ["l-1"]
    assert "Skipping pair during recommendation" in caplog.text


def test_recommended_rate_never_negative_at_zero_market(make_borrower, make_lender):
    """Test credit nudge cannot push a near-zero rate below the market floor"""
    borrower = make_borrower(credit_score=800).with_risk_score(10)
    lender = make_lender(interest_rate=0.4)

    assert calculate_recommended_rate(borrower, lender, 0.0) == 0.0
