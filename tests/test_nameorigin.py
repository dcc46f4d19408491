#!/usr/bin/env python3
"""
Tests for nameorigin configuration, encoding, recurrent model, training
and evaluation.

Run all tests:
    python -m pytest tests/ -v --tb=short
"""

import sys
from pathlib import Path

import pytest
import torch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def _zero_params(n_letters, n_hidden, n_categories):
    from nameorigin.model.params import ModelParameters
    return ModelParameters(
        i2h_weights=torch.zeros(n_letters + n_hidden, n_hidden),
        i2h_bias=torch.zeros(n_hidden),
        h2o_weights=torch.zeros(n_hidden, n_categories),
        h2o_bias=torch.zeros(n_categories),
    )


# =============================================================================
# Config Tests
# =============================================================================

class TestConfig:
    """Tests for the configuration system."""

    def test_default_config_loads(self):
        """Default config should validate without errors."""
        from nameorigin.config import NameOriginConfig
        config = NameOriginConfig()
        config.validate()
        assert config.model.n_hidden == 128
        assert len(config.data.symbols) == 57

    def test_smoke_test_config(self):
        """Smoke test config should create a valid minimal configuration."""
        from nameorigin.config import NameOriginConfig
        config = NameOriginConfig.for_smoke_test()
        config.validate()
        assert config.training.device == "cpu"
        assert config.training.steps == 200

    def test_invalid_n_hidden(self):
        """n_hidden must be positive."""
        from nameorigin.config import ModelConfig
        with pytest.raises(ValueError, match="n_hidden"):
            ModelConfig(n_hidden=0).validate()

    def test_invalid_learning_rate(self):
        """learning_rate must be positive."""
        from nameorigin.config import TrainingConfig
        with pytest.raises(ValueError, match="learning_rate"):
            TrainingConfig(learning_rate=0.0).validate()

    def test_duplicate_symbols(self):
        """The alphabet must not repeat symbols."""
        from nameorigin.config import DataConfig
        with pytest.raises(ValueError, match="distinct"):
            DataConfig(symbols="abca").validate()

    def test_report_every_larger_than_steps(self):
        """Reporting less often than the run length is a config error."""
        from nameorigin.config import NameOriginConfig, TrainingConfig
        config = NameOriginConfig(training=TrainingConfig(steps=10, report_every=100))
        with pytest.raises(ValueError, match="report_every"):
            config.validate()

    def test_yaml_round_trip(self, tmp_path):
        """Config should save to YAML and load back identically."""
        from nameorigin.config import NameOriginConfig
        config = NameOriginConfig.for_smoke_test()

        yaml_path = tmp_path / "test_config.yaml"
        config.to_yaml(yaml_path)

        loaded = NameOriginConfig.from_yaml(yaml_path)
        assert loaded.to_dict() == config.to_dict()

    def test_missing_yaml(self, tmp_path):
        """Loading a missing file should fail clearly."""
        from nameorigin.config import NameOriginConfig
        with pytest.raises(FileNotFoundError):
            NameOriginConfig.from_yaml(tmp_path / "nope.yaml")

    def test_shipped_default_yaml(self):
        """configs/default.yaml should match the dataclass defaults."""
        from nameorigin.config import NameOriginConfig
        path = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"
        loaded = NameOriginConfig.from_yaml(path)
        assert loaded.to_dict() == NameOriginConfig().to_dict()

    def test_param_count(self):
        """Parameter count formula should match the built model."""
        from nameorigin.config import ModelConfig
        from nameorigin.model.params import build_model
        config = ModelConfig(n_hidden=16)
        params = build_model(57, 18, n_hidden=16)
        assert config.n_params(57, 18) == params.n_params


# =============================================================================
# Registry & Encoding Tests
# =============================================================================

class TestRegistry:
    """Tests for the alphabet and category registry."""

    def test_default_alphabet_order(self):
        """Lowercase, then uppercase, then punctuation."""
        from nameorigin.data.registry import Alphabet
        alphabet = Alphabet()
        assert len(alphabet) == 57
        assert alphabet.index("a") == 0
        assert alphabet.index("z") == 25
        assert alphabet.index("A") == 26
        assert alphabet.index(" ") == 52
        assert alphabet.index("'") == 56

    def test_build_registry_keeps_discovery_order(self):
        """Categories should be indexed in corpus order, not sorted."""
        from nameorigin.data.registry import build_registry
        corpus = {"Scottish": ["Smith"], "Arabic": ["Nader"], "Czech": ["Novak"]}
        alphabet, categories = build_registry(corpus)
        assert list(categories) == ["Scottish", "Arabic", "Czech"]
        assert categories.index("Arabic") == 1
        assert categories.name(2) == "Czech"
        assert len(alphabet) == 57

    def test_empty_corpus(self):
        """An empty corpus has no categories to build."""
        from nameorigin.data.registry import build_registry
        with pytest.raises(ValueError):
            build_registry({})

    def test_duplicate_symbols_rejected(self):
        """Alphabet symbols must be distinct."""
        from nameorigin.data.registry import Alphabet
        with pytest.raises(ValueError):
            Alphabet("aba")

    def test_unknown_category(self):
        """Unknown category lookups should raise UnknownCategoryError."""
        from nameorigin.data.registry import CategorySpace
        from nameorigin.errors import UnknownCategoryError
        categories = CategorySpace(["X", "Y"])
        with pytest.raises(UnknownCategoryError, match="Klingon"):
            categories.index("Klingon")


class TestEncoding:
    """Tests for one-hot encoding and tensorization."""

    def test_encode_letter_one_hot(self):
        """Every letter encodes to a vector with a single 1 at its index."""
        from nameorigin.data.encoding import encode_letter
        from nameorigin.data.registry import Alphabet
        alphabet = Alphabet()
        for letter in alphabet:
            vec = encode_letter(letter, alphabet)
            assert vec.shape == (len(alphabet),)
            assert vec.sum().item() == 1.0
            assert vec[alphabet.index(letter)].item() == 1.0

    def test_encode_unknown_letter(self):
        """Letters outside the alphabet must raise, never encode to zeros."""
        from nameorigin.data.encoding import encode_letter
        from nameorigin.data.registry import Alphabet
        from nameorigin.errors import UnknownLetterError
        with pytest.raises(UnknownLetterError):
            encode_letter("é", Alphabet())
        with pytest.raises(KeyError):
            encode_letter("7", Alphabet())

    def test_word_to_tensor_order(self):
        """Rows follow character order."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        alphabet = Alphabet(["a", "b"])
        assert word_to_tensor("ab", alphabet).tolist() == [[1.0, 0.0], [0.0, 1.0]]
        assert word_to_tensor("ba", alphabet).tolist() == [[0.0, 1.0], [1.0, 0.0]]

    def test_word_tensor_length(self):
        """Word tensor has one row per character."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        tensor = word_to_tensor("O'Neal", Alphabet())
        assert tensor.shape == (6, 57)
        assert torch.equal(tensor.sum(dim=1), torch.ones(6))

    def test_empty_word(self):
        """Empty words cannot be tensorized."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.errors import EmptySequenceError
        with pytest.raises(EmptySequenceError):
            word_to_tensor("", Alphabet())

    def test_encode_category(self):
        """Category k of n encodes to a length-n vector with 1 at k."""
        from nameorigin.data.encoding import category_to_tensor, encode_category
        from nameorigin.data.registry import CategorySpace
        from nameorigin.errors import UnknownCategoryError
        categories = CategorySpace(["X", "Y", "Z"])
        assert encode_category("Y", categories).tolist() == [0.0, 1.0, 0.0]
        assert category_to_tensor("Z", categories).tolist() == [0.0, 0.0, 1.0]
        with pytest.raises(UnknownCategoryError):
            encode_category("W", categories)

    def test_stack_equal_lengths(self):
        """Words of equal length can share a batch tensor."""
        from nameorigin.data.encoding import stack_word_tensors, word_to_tensor
        from nameorigin.data.registry import Alphabet
        alphabet = Alphabet(["a", "b", "c"])
        batch = stack_word_tensors([word_to_tensor(w, alphabet) for w in ("ab", "ca")])
        assert batch.shape == (2, 2, 3)

    def test_stack_unequal_lengths(self):
        """Words of different length must never be padded into a batch."""
        from nameorigin.data.encoding import stack_word_tensors, word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.errors import ShapeMismatchError
        alphabet = Alphabet(["a", "b", "c"])
        with pytest.raises(ShapeMismatchError):
            stack_word_tensors([word_to_tensor(w, alphabet) for w in ("ab", "abc")])


# =============================================================================
# Corpus & Sampler Tests
# =============================================================================

class TestCorpus:
    """Tests for corpus loading and normalization."""

    def test_unicode_to_ascii(self):
        """Accents are stripped, foreign symbols dropped."""
        from nameorigin.data.corpus import unicode_to_ascii
        assert unicode_to_ascii("Ślusàrski") == "Slusarski"
        assert unicode_to_ascii("Dvořák-Ng") == "DvorakNg"

    def test_load_corpus(self, tmp_path):
        """One file per category, sorted; blank lines skipped."""
        from nameorigin.data.corpus import load_corpus
        (tmp_path / "Czech.txt").write_text("Novák\n\nDvořák\n", encoding="utf-8")
        (tmp_path / "Arabic.txt").write_text("Nader\n", encoding="utf-8")
        (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")

        corpus = load_corpus(tmp_path)
        assert list(corpus) == ["Arabic", "Czech"]
        assert corpus["Czech"] == ["Novak", "Dvorak"]

    def test_missing_directory(self, tmp_path):
        """A missing corpus directory should fail clearly."""
        from nameorigin.data.corpus import load_corpus
        with pytest.raises(FileNotFoundError):
            load_corpus(tmp_path / "missing")

    def test_smoke_corpus_loads(self):
        """The bundled mini corpus is loadable and fully in-alphabet."""
        from nameorigin.data.corpus import load_corpus
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        path = Path(__file__).resolve().parent.parent / "data_smoke" / "names"
        corpus = load_corpus(path)
        assert set(corpus) == {"Czech", "English", "Japanese"}
        for names in corpus.values():
            for name in names:
                word_to_tensor(name, Alphabet())


class TestSampler:
    """Tests for the with-replacement example sampler."""

    def test_sample_tensors(self):
        """Sampled examples carry matching tensors."""
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        corpus = {"X": ["abc"], "Y": ["ba"]}
        alphabet, categories = build_registry(corpus, symbols="abc")
        sampler = ExampleSampler(corpus, alphabet, categories, seed=0)
        for example in sampler.stream(limit=20):
            assert example.word_tensor.shape == (len(example.word), 3)
            assert example.category_tensor[categories.index(example.category)] == 1.0

    def test_proportional_sampling(self):
        """Category frequency follows corpus size (no stratification)."""
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        corpus = {"A": [f"a{i}" for i in range(90)], "B": [f"b{i}" for i in range(10)]}
        alphabet, categories = build_registry(corpus)
        sampler = ExampleSampler(corpus, alphabet, categories, seed=1234)

        n = 10_000
        hits = sum(1 for _ in range(n) if sampler.sample_pair()[0] == "A")
        assert abs(hits / n - 0.9) < 0.02

    def test_stream_limit(self):
        """stream(limit) yields exactly limit examples."""
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        corpus = {"X": ["ab"]}
        alphabet, categories = build_registry(corpus)
        sampler = ExampleSampler(corpus, alphabet, categories, seed=0)
        assert len(list(sampler.stream(limit=7))) == 7

    def test_empty_multiset(self):
        """A corpus with no names at all cannot be sampled."""
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        corpus = {"X": []}
        alphabet, categories = build_registry(corpus)
        with pytest.raises(ValueError):
            ExampleSampler(corpus, alphabet, categories)


# =============================================================================
# Model Tests
# =============================================================================

class TestModelParameters:
    """Tests for parameter construction."""

    def test_build_model_shapes(self):
        """All four tensors get the documented shapes."""
        from nameorigin.model.params import build_model
        params = build_model(n_letters=57, n_categories=18)
        assert params.i2h_weights.shape == (57 + 128, 128)
        assert params.i2h_bias.shape == (128,)
        assert params.h2o_weights.shape == (128, 18)
        assert params.h2o_bias.shape == (18,)
        assert (params.n_letters, params.n_hidden, params.n_categories) == (57, 128, 18)
        assert all(t.requires_grad for t in params.tensors())

    def test_seeded_init_is_reproducible(self):
        """Same seed, same parameters."""
        from nameorigin.model.params import build_model
        a = build_model(5, 3, n_hidden=4, seed=7)
        b = build_model(5, 3, n_hidden=4, seed=7)
        for ta, tb in zip(a.tensors(), b.tensors()):
            assert torch.equal(ta, tb)

    def test_inconsistent_shapes(self):
        """Mismatched bias shape is rejected."""
        from nameorigin.errors import ShapeMismatchError
        from nameorigin.model.params import ModelParameters
        with pytest.raises(ShapeMismatchError):
            ModelParameters(
                i2h_weights=torch.zeros(5, 2),
                i2h_bias=torch.zeros(3),
                h2o_weights=torch.zeros(2, 2),
                h2o_bias=torch.zeros(2),
            )

    def test_invalid_dimensions(self):
        """Dimensions must be positive."""
        from nameorigin.model.params import build_model
        with pytest.raises(ValueError):
            build_model(0, 3)


class TestCell:
    """Tests for a single recurrent step."""

    def test_step_shapes_and_ranges(self):
        """Output is a distribution; hidden is a sigmoid activation."""
        from nameorigin.data.encoding import encode_letter
        from nameorigin.data.registry import Alphabet
        from nameorigin.model.cell import step, zero_hidden
        from nameorigin.model.params import build_model
        alphabet = Alphabet()
        params = build_model(len(alphabet), 4, n_hidden=8, seed=0)
        output, hidden = step(encode_letter("k", alphabet), zero_hidden(params), params)
        assert output.shape == (4,)
        assert hidden.shape == (8,)
        assert output.sum().item() == pytest.approx(1.0, abs=1e-6)
        assert ((hidden > 0) & (hidden < 1)).all()

    def test_zero_parameters_give_uniform_output(self):
        """All-zero parameters degenerate to the uniform distribution."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.model.unroll import forward
        alphabet = Alphabet(["a", "b", "c"])
        params = _zero_params(n_letters=3, n_hidden=2, n_categories=2)
        for word in ("a", "cab", "bbbbccca"):
            output = forward(word_to_tensor(word, alphabet), params)
            assert torch.allclose(output, torch.tensor([0.5, 0.5]))


class TestUnroller:
    """Tests for the sequence unroller."""

    def test_output_is_distribution_for_any_length(self):
        """Softmax normalization holds for word lengths 1..N."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.model.params import build_model
        from nameorigin.model.unroll import forward
        alphabet = Alphabet()
        params = build_model(len(alphabet), 6, seed=3)
        base = "Kowalczykiewicz O'Brien"
        for n in range(1, len(base) + 1):
            output = forward(word_to_tensor(base[:n], alphabet), params)
            assert output.shape == (6,)
            assert (output >= 0).all()
            assert output.sum().item() == pytest.approx(1.0, abs=1e-5)

    def test_forward_is_deterministic(self):
        """Repeated calls are bit-identical; no hidden state carries over."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.model.params import build_model
        from nameorigin.model.unroll import forward
        alphabet = Alphabet()
        params = build_model(len(alphabet), 5, seed=1)
        word = word_to_tensor("Nakamura", alphabet)
        first = forward(word, params)
        forward(word_to_tensor("Smith", alphabet), params)
        second = forward(word, params)
        assert torch.equal(first, second)

    def test_order_matters(self):
        """The recurrence is sequential, so letter order changes the output."""
        from nameorigin.data.encoding import word_to_tensor
        from nameorigin.data.registry import Alphabet
        from nameorigin.model.params import build_model
        from nameorigin.model.unroll import forward
        alphabet = Alphabet()
        params = build_model(len(alphabet), 5, seed=2, init_std=1.0)
        ab = forward(word_to_tensor("ab", alphabet), params)
        ba = forward(word_to_tensor("ba", alphabet), params)
        assert not torch.equal(ab, ba)

    def test_empty_word_tensor(self):
        """Zero positions must raise, not return a default distribution."""
        from nameorigin.errors import EmptySequenceError
        from nameorigin.model.params import build_model
        from nameorigin.model.unroll import forward
        params = build_model(3, 2, n_hidden=2)
        with pytest.raises(EmptySequenceError):
            forward(torch.zeros(0, 3), params)

    def test_batched_tensor_rejected(self):
        """A (batch, length, n_letters) tensor is not a single word."""
        from nameorigin.errors import ShapeMismatchError
        from nameorigin.model.params import build_model
        from nameorigin.model.unroll import forward
        params = build_model(3, 2, n_hidden=2)
        with pytest.raises(ShapeMismatchError):
            forward(torch.zeros(2, 4, 3), params)


# =============================================================================
# Training Tests
# =============================================================================

class TestTrainer:
    """Tests for the single-example SGD trainer."""

    def _setup(self, corpus, symbols="abc", n_hidden=8, seed=0):
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        from nameorigin.model.params import build_model
        alphabet, categories = build_registry(corpus, symbols=symbols)
        params = build_model(len(alphabet), len(categories), n_hidden=n_hidden, seed=seed)
        sampler = ExampleSampler(corpus, alphabet, categories, seed=seed)
        return alphabet, categories, params, sampler

    def test_loss_decreases(self):
        """One repeated name: late loss is below the step-0 loss."""
        from nameorigin.training.trainer import train
        # "Y" has no names, so every sample is ("X", "ab")
        _, _, params, sampler = self._setup({"X": ["ab"] * 5, "Y": []})
        params, history = train(
            params, sampler.stream(), steps=200, learning_rate=0.5, report_every=10,
        )
        assert history[0][0] == 0
        assert history[-1][1] < history[0][1]

    def test_report_schedule(self):
        """Loss samples are recorded at multiples of report_every."""
        from nameorigin.training.trainer import train
        _, _, params, sampler = self._setup({"X": ["ab", "cab"], "Y": ["ba"]})
        _, history = train(
            params, sampler.stream(), steps=50, learning_rate=0.1, report_every=10,
        )
        assert [s for s, _ in history] == [0, 10, 20, 30, 40]
        assert all(loss >= 0 for _, loss in history)

    def test_parameters_updated_in_place(self):
        """train() returns the same object, with changed values."""
        from nameorigin.training.trainer import train
        _, _, params, sampler = self._setup({"X": ["ab"], "Y": ["ca"]})
        before = [t.detach().clone() for t in params.tensors()]
        trained, _ = train(
            params, sampler.stream(), steps=5, learning_rate=0.1, report_every=1,
        )
        assert trained is params
        assert any(not torch.equal(b, a) for b, a in zip(before, params.tensors()))
        assert [tuple(b.shape) for b in before] == [tuple(a.shape) for a in params.tensors()]

    def test_sgd_update_matches_gradient(self):
        """The update is exactly p - lr * grad of the MSE loss."""
        import torch.nn.functional as F
        from nameorigin.model.unroll import forward
        from nameorigin.training.trainer import Trainer
        _, _, params, sampler = self._setup({"X": ["abc"], "Y": ["b"]})
        example = sampler.sample()

        loss = F.mse_loss(forward(example.word_tensor, params), example.category_tensor)
        grads = torch.autograd.grad(loss, params.tensors())
        expected = [(t - 0.3 * g).detach() for t, g in zip(params.tensors(), grads)]

        trainer = Trainer(params, learning_rate=0.3)
        step_loss = trainer.train_step(example)

        assert step_loss == pytest.approx(loss.item())
        for t, e in zip(params.tensors(), expected):
            assert torch.allclose(t, e)

    def test_tuple_examples(self):
        """Plain (word_tensor, category_tensor) pairs are accepted."""
        from nameorigin.data.encoding import category_to_tensor, word_to_tensor
        from nameorigin.training.trainer import train
        alphabet, categories, params, _ = self._setup({"X": ["ab"], "Y": ["ca"]})
        pair = (word_to_tensor("ab", alphabet), category_to_tensor("X", categories))
        _, history = train(params, [pair] * 3, steps=3, learning_rate=0.1, report_every=1)
        assert len(history) == 3

    def test_batched_example_is_fatal(self):
        """Stacked examples raise ShapeMismatchError and leave params alone."""
        from nameorigin.data.encoding import stack_word_tensors, word_to_tensor
        from nameorigin.errors import ShapeMismatchError
        from nameorigin.training.trainer import train
        alphabet, _, params, _ = self._setup({"X": ["ab"], "Y": ["ca"]})
        batch = stack_word_tensors([word_to_tensor("ab", alphabet), word_to_tensor("ca", alphabet)])
        before = [t.detach().clone() for t in params.tensors()]

        with pytest.raises(ShapeMismatchError):
            train(params, [(batch, torch.tensor([1.0, 0.0]))], steps=1,
                  learning_rate=0.1, report_every=1)
        for b, a in zip(before, params.tensors()):
            assert torch.equal(b, a)

    def test_stream_exhausted(self):
        """Running out of examples before the step budget is an error."""
        from nameorigin.training.trainer import train
        _, _, params, sampler = self._setup({"X": ["ab"]})
        with pytest.raises(ValueError, match="ran out"):
            train(params, sampler.stream(limit=2), steps=5,
                  learning_rate=0.1, report_every=1)

    def test_invalid_arguments(self):
        """Non-positive steps, learning rate or report interval are rejected."""
        from nameorigin.training.trainer import train
        _, _, params, sampler = self._setup({"X": ["ab"]})
        with pytest.raises(ValueError):
            train(params, sampler.stream(), steps=0, learning_rate=0.1, report_every=1)
        with pytest.raises(ValueError):
            train(params, sampler.stream(), steps=5, learning_rate=0.0, report_every=1)
        with pytest.raises(ValueError):
            train(params, sampler.stream(), steps=5, learning_rate=0.1, report_every=0)


# =============================================================================
# Evaluation Tests
# =============================================================================

class TestEvaluation:
    """Tests for prediction and metrics."""

    def test_predict_distribution(self):
        """predict returns a detached category distribution."""
        from nameorigin.evaluation.predict import predict
        from nameorigin.model.params import build_model
        params = build_model(57, 4, seed=0)
        dist = predict(params, "Jackson")
        assert dist.shape == (4,)
        assert not dist.requires_grad
        assert dist.sum().item() == pytest.approx(1.0, abs=1e-5)

    def test_predict_errors(self):
        """Empty or out-of-alphabet names propagate encoding errors."""
        from nameorigin.errors import EmptySequenceError, UnknownLetterError
        from nameorigin.evaluation.predict import predict
        from nameorigin.model.params import build_model
        params = build_model(57, 4, seed=0)
        with pytest.raises(EmptySequenceError):
            predict(params, "")
        with pytest.raises(UnknownLetterError):
            predict(params, "Müller")

    def test_top_categories(self):
        """Top-k is sorted, named, and capped at the category count."""
        from nameorigin.data.registry import Alphabet, CategorySpace
        from nameorigin.evaluation.predict import top_categories
        from nameorigin.model.params import build_model
        alphabet = Alphabet()
        categories = CategorySpace(["X", "Y", "Z"])
        params = build_model(len(alphabet), 3, seed=0)

        ranked = top_categories(params, "Smith", alphabet, categories, k=2)
        assert len(ranked) == 2
        assert ranked[0][1] >= ranked[1][1]
        assert all(name in categories for name, _ in ranked)
        assert len(top_categories(params, "Smith", alphabet, categories, k=10)) == 3

    def test_confusion_matrix(self):
        """Rows of sampled categories sum to 1; accuracy is a fraction."""
        from nameorigin.data.registry import build_registry
        from nameorigin.data.sampler import ExampleSampler
        from nameorigin.evaluation.metrics import confusion_matrix, per_category_accuracy
        from nameorigin.model.params import build_model
        corpus = {"X": ["ab", "abc"], "Y": ["ca"], "Z": []}
        alphabet, categories = build_registry(corpus, symbols="abc")
        params = build_model(3, 3, n_hidden=4, seed=0)
        sampler = ExampleSampler(corpus, alphabet, categories, seed=0)

        matrix, acc = confusion_matrix(params, sampler, n_samples=200)
        assert matrix.shape == (3, 3)
        assert matrix[0].sum() == pytest.approx(1.0)
        assert matrix[1].sum() == pytest.approx(1.0)
        assert matrix[2].sum() == 0.0
        assert 0.0 <= acc <= 1.0
        assert set(per_category_accuracy(matrix, list(categories))) == {"X", "Y", "Z"}

    def test_average_loss(self):
        """Trailing window mean keeps the step indices."""
        from nameorigin.evaluation.metrics import average_loss
        history = [(0, 1.0), (10, 3.0), (20, 5.0)]
        assert average_loss(history, window=2) == [(0, 1.0), (10, 2.0), (20, 4.0)]
        assert average_loss([], window=3) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
