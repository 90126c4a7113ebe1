"""
Movie Rating - Main Package

Rating prediction for movies with matrix factorization:
- CSV loading of (user, movie, rating) tables
- Dense user/movie index encoding
- Matrix factorization training (PyTorch)
- Regression evaluation (RMSE, R²)
- Single-pair recommend / do-not-recommend prediction
"""

__version__ = "1.0.0"
__author__ = "Movie Rec Team"
