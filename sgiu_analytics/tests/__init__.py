'''
SGIU Analytics Test Suite

Test Modules:
-------------
- test_statistics.py: Pearson correlation and OLS regression
- test_feature_encoding.py: Feature vector layout and normalizer
- test_logistic_trainer.py: Gradient descent trainer, sigmoid clipping
- test_predictor.py: Probabilities from trained models
- test_datasets.py: Labeled rows and monthly aggregates from incidents
- test_api.py: /analytics endpoint contracts

Running Tests:
--------------
    pip install -e ".[test]"
    pytest sgiu_analytics/tests -v
'''

__all__ = []
