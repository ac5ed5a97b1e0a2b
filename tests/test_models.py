import pytest

from review_length.core.errors import InsufficientData, InvalidConfig
from review_length.core.records import Label
from review_length.models import (
    LassoEstimator,
    LinearSVMEstimator,
    NaiveBayesEstimator,
    SentimentLogRegEstimator,
    get_factory_and_params,
    resolve_model_name,
)

from conftest import make_record

POSITIVE = ["great food and friendly staff", "excellent pizza loved it", "wonderful service great value"]
NEGATIVE = ["cold food and rude staff", "terrible pizza never again", "awful service bad value"]


def _model(name, **overrides):
    factory, params = get_factory_and_params(name, **overrides)
    return factory(params)


def _text_sample(repeat=4):
    records = []
    for r in range(repeat):
        for t in POSITIVE:
            records.append(make_record(len(records), Label.POS, len(t.split()), text=t))
        for t in NEGATIVE:
            records.append(make_record(len(records), Label.NEG, len(t.split()), text=t))
    return records


class TestRegistry:
    def test_aliases(self):
        assert resolve_model_name("LR") == "logreg"
        assert resolve_model_name("nb") == "naive_bayes"
        assert resolve_model_name("l1") == "lasso"
        assert resolve_model_name("linear_svm") == "svm"

    def test_unknown(self):
        with pytest.raises(InvalidConfig, match="Unknown model"):
            resolve_model_name("gbm")

    def test_overrides_merge_over_defaults(self):
        _, params = get_factory_and_params("lasso", C=0.5)
        assert params["C"] == 0.5
        assert params["max_iter"] == 500

    def test_default_logreg_is_unpenalised(self):
        est = _model("logreg")
        assert isinstance(est, SentimentLogRegEstimator)
        assert est.p["C"] == float("inf")
        assert est.p["threshold"] == 0.5

    @pytest.mark.parametrize(
        "name,cls",
        [("naive_bayes", NaiveBayesEstimator), ("lasso", LassoEstimator), ("svm", LinearSVMEstimator)],
    )
    def test_text_models_built(self, name, cls):
        assert isinstance(_model(name), cls)


@pytest.mark.parametrize("name", ["naive_bayes", "svm"])
def test_text_models_fit_training_vocabulary(name):
    sample = _text_sample()
    est = _model(name).fit(sample)
    assert est.predict(sample).tolist() == [int(r.label) for r in sample]


def test_lasso_predicts_label_codes():
    sample = _text_sample(repeat=6)
    pred = _model("lasso", C=10.0).fit(sample).predict(sample)
    assert set(pred.tolist()) <= {0, 1}


def test_text_model_single_class_raises():
    sample = [r for r in _text_sample() if r.label == Label.POS]
    with pytest.raises(InsufficientData):
        _model("svm").fit(sample)


def test_text_model_predict_before_fit():
    with pytest.raises(RuntimeError):
        _model("naive_bayes").predict(_text_sample(1))


def test_lasso_uses_pure_l1_penalty():
    sample = _text_sample(repeat=6)
    est = _model("lasso").fit(sample)
    clf = est.model[-1]
    assert clf.l1_ratio == 1.0
    # an L1 fit zeroes out some of the vocabulary
    assert (clf.coef_ == 0).any()
