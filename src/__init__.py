"""
Drone Build Estimator - Main Package
====================================

Performance estimation for multirotor builds assembled from catalog parts.

This package provides:
- Build Estimator (build_estimator): mass, thrust, power, flight time,
  top speed, hover, compatibility and pricing estimates
"""

__version__ = "0.1.0"
__author__ = "Drone Build Estimator Team"
