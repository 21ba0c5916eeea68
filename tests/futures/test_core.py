from promises import *
from .test_base import FutureTestBase


class FutureCoreTest(FutureTestBase):
    def test_repr(self):
        f = Future(name='load')
        f.then(lambda _: None)
        f.then(lambda _: None)
        self.assertIn('load', repr(f))
        self.assertIn('PENDING', repr(f))

        f.resolve(10)
        self.assertIn('result=10', repr(f))
        self.assertIn('exception=', repr(Future.failed(TypeError())))

    def test_initial_state(self):
        f = Future()
        self.assertEqual(FutureState.pending, f.state)
        self.assertTrue(f.is_pending())
        self.assertFalse(f.is_settled())
        self.assertIsNone(f.error)
        self.assertEqual(0, f.get_progress())
        self.assertRaises(InvalidStateError, lambda: f.value)

    def test_get_value_when_resolved(self):
        f = Future()
        f.resolve(10)

        self.assertEqual(FutureState.resolved, f.state)
        self.assertTrue(f.is_resolved())
        self.assertTrue(f.is_settled())
        self.assertFalse(f.try_resolve(15))
        self.assertEqual(10, f.value)
        self.assertIsNone(f.error)

    def test_void_future_resolves_with_none(self):
        f = Future()
        f.resolve()
        self.assertTrue(f.is_resolved())
        self.assertIsNone(f.value)

    def test_get_error_when_failed(self):
        f = Future()
        ex = TypeError()
        f.fail(ex)

        self.assertEqual(FutureState.failed, f.state)
        self.assertTrue(f.is_failed())
        self.assertFalse(f.try_fail(TimeoutError()))
        self.assertIs(ex, f.error)
        self.assertRaises(InvalidStateError, lambda: f.value)

    def test_resolve_when_already_resolved(self):
        f = Future()
        f.resolve(123)
        self.assertRaises(AlreadySettledError, f.resolve, 321)
        self.assertRaises(AlreadySettledError, f.fail, TypeError())
        self.assertEqual(123, f.value)

    def test_fail_when_already_failed(self):
        f = Future()
        f.fail(TypeError())
        self.assertRaises(AlreadySettledError, f.fail, ValueError())
        self.assertRaises(AlreadySettledError, f.resolve, 1)
        self.assertIsInstance(f.error, TypeError)

    def test_already_settled_is_invalid_state(self):
        f = Future.resolved()
        self.assertRaises(InvalidStateError, f.resolve)
        self.assertRaises(Error, f.resolve)

    def test_resolved_factory(self):
        f = Future.resolved(5)
        self.assertIsInstance(f, Future)
        self.assertEqual(5, f.value)

    def test_failed_factory(self):
        f = Future.failed(KeyError('k'))
        self.assertTrue(f.is_failed())
        self.assertIsInstance(f.error, KeyError)

    def test_completed_factory(self):
        self.assertEqual(4, Future.completed(lambda x: x * x, 2).value)

        f = Future.completed(self._raise, ValueError())
        self.assertIsInstance(f.error, ValueError)

    def test_complete(self):
        f = Future()
        f.complete(int, '42')
        self.assertEqual(42, f.value)
        self.assertFalse(f.try_complete(int, '43'))
        self.assertRaises(AlreadySettledError, f.complete, int, '44')

    def test_complete_does_not_fail_on_handler_error(self):
        f = Future()
        f.then(lambda _: self._raise(KeyError()))

        self.assertRaises(KeyError, f.complete, lambda: 1)
        self.assertTrue(f.is_resolved())

    def test_fail_expects_exception(self):
        f = Future()
        self.assertRaises(AssertionError, f.fail, 'error')
        self.assertTrue(f.is_pending())


class StateChangedTest(FutureTestBase):
    def test_initialized(self):
        calls, record = self.recorder()
        with state_changed.subscribe(record):
            f = Future()

        self.assertEqual([(f, Transition.initialized)], calls)

    def test_resolved_transitions_bracket_callbacks(self):
        f = Future()
        calls, record = self.recorder()
        f.then(lambda _: calls.append('then'))
        f.finally_(lambda: calls.append('finally'))

        with state_changed.subscribe(record):
            f.resolve(1)

        self.assertEqual([(f, Transition.resolved_before_callbacks),
                          'then',
                          'finally',
                          (f, Transition.resolved_after_callbacks)], calls)

    def test_failed_transitions_bracket_callbacks(self):
        f = Future()
        calls, record = self.recorder()
        f.catch(lambda _: calls.append('catch'))

        with state_changed.subscribe(record):
            f.fail(TypeError())

        self.assertEqual([(f, Transition.failed_before_callbacks),
                          'catch',
                          (f, Transition.failed_after_callbacks)], calls)

    def test_state_is_set_before_callbacks(self):
        f = Future()
        states = []
        sub = state_changed.subscribe(lambda fut, _: states.append(fut.state))
        try:
            f.resolve(1)
        finally:
            sub.unsubscribe()

        self.assertEqual([FutureState.resolved, FutureState.resolved], states)

    def test_unsubscribe_inside_callback(self):
        calls = []

        def on_change(fut, transition):
            calls.append(transition)
            state_changed.unsubscribe(on_change)

        state_changed.subscribe(on_change)
        Future().resolve()

        self.assertEqual([Transition.initialized], calls)
        self.assertEqual(0, len(state_changed))

    def test_inert_once_unsubscribed(self):
        calls, record = self.recorder()
        sub = state_changed.subscribe(record)
        self.assertTrue(sub.unsubscribe())
        self.assertFalse(sub.unsubscribe())

        Future().resolve()
        self.assertEqual([], calls)


if __name__ == '__main__':
    import unittest

    unittest.main()
