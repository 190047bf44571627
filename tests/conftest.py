"""
Pytest configuration and fixtures for the formula API tests.

Provides a TestClient for the module-level app and a second app built with
explicit CORS settings for origin-checking tests.
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import app, create_app


@pytest.fixture(scope="module")
def client():
    """TestClient for the application as configured from the environment."""
    return TestClient(app)


@pytest.fixture
def cors_settings():
    """Settings with a known allow-list and preview pattern."""
    return Settings(
        allowed_origins=("http://localhost:3000", "https://calc.example.com"),
        preview_project="ber-calculator-client",
        preview_scope="naseems-projects-1f6111c0",
        preview_domain="vercel.app",
    )


@pytest.fixture
def cors_client(cors_settings):
    """TestClient for an app built from cors_settings."""
    return TestClient(create_app(cors_settings))


@pytest.fixture
def link_budget_params():
    """
    Satellite-style downlink.

    N = -228.6 + 10log10(290) + 10log10(1e6) = -143.98 dBW
    Ptx = N + 5 + 10 + 10 + 150 + 3 - 20 - 20 = -5.98 dBW (0.25 W)
    """
    return {
        "temperature": 290,
        "dataRate": 1e6,
        "noiseFigure": 5,
        "requiredEbNo": 10,
        "fadeMargin": 10,
        "pathLoss": 150,
        "otherLosses": 3,
        "txGain": 20,
        "rxGain": 20,
    }


@pytest.fixture
def ofdm_params():
    """LTE-like resource grid: 100 RBs of 12 subcarriers, 7 symbols per 0.5 ms."""
    return {
        "modulationOrder": 16,
        "rbBandwidth": 180e3,
        "subcarrierSpacing": 15e3,
        "symbolsPerRb": 7,
        "rbDuration": 0.5e-3,
        "parallelRbs": 100,
    }


@pytest.fixture
def comm_system_params():
    """Telephone-grade voice: 4 kHz, 8-bit PCM, 2:1 compression, rate-1/2 code."""
    return {
        "bandwidth": 4000,
        "quantizerBits": 8,
        "sourceEncoderRate": 0.5,
        "channelEncoderRate": 0.5,
        "burstSize": 1000,
    }


@pytest.fixture
def cellular_params():
    """1000 km2 of 2 km cells, 50k subscribers, 18 dB SIR, n = 4."""
    return {
        "coverageArea": 1000,
        "cellRadius": 2,
        "subscribers": 50000,
        "callsPerHour": 2,
        "callDuration": 3,
        "requiredSir": 18,
        "pathLossExponent": 4,
    }
