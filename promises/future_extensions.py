from .future_core import FutureCore
import functools

_MISSING = object()


class FutureExtensions(object):
    """Mixin class for Future construction and combination functions.

    Derived futures forward cancellation requests to whichever source future
    is still pending, and settle themselves only while they are still
    pending, so a source settling late never causes a double settlement.
    """

    @classmethod
    def resolved(cls, value=None):
        """Returns already resolved future.

        Args:
            value: value to resolve future with.
        """
        f = cls._new()
        f.resolve(value)
        return f

    @classmethod
    def failed(cls, exception):
        """Returns already failed future.

        Args:
            exception: Exception to fail future with.
        """
        f = cls._new()
        f.fail(exception)
        return f

    @classmethod
    def completed(cls, fun, *args, **kwargs):
        """Returns resolved or failed future set from provided function."""
        f = cls._new()
        f.complete(fun, *args, **kwargs)
        return f

    def map(self, fun_res):
        """Returns future which will be resolved with the result of applying
        provided function to original future value.

        Failure of the original future, or an exception raised by the
        function, fails the new future. Cancellation requested on the new
        future is forwarded to the original while it is pending.

        Args:
            fun_res: function that accepts original value and returns new value.
        """
        assert callable(fun_res), "Future.map expects callable"
        f = self._new()

        def on_success_map(value):
            if f.is_pending():
                f.complete(fun_res, value)

        def backprop_cancel(_):
            if self.is_pending():
                self.request_cancel()

        self.then(on_success_map)
        self.catch(f.try_fail)
        f.on_cancel_requested(backprop_cancel)
        return f

    def chain(self, future_fun):
        """Returns future which represents two futures chained one after another.

        Failures are propagated from first future, from second future and from
        callback function. Cancellation requested on the returned future goes
        to the second future while it is pending, otherwise to the first one.

        Args:
            future_fun: either function that accepts first future value and
            returns future to be chained after its successful completion, or
            Future instance directly.
        """
        assert callable(future_fun) or isinstance(future_fun, FutureCore), \
            "Future.chain expects callable or Future"

        f = self._new()
        chained = None

        def on_success_start_next(value):
            nonlocal chained
            try:
                f2 = future_fun if isinstance(future_fun, FutureCore) else future_fun(value)
                chained = self.convert(f2)
            except Exception as ex:
                f.try_fail(ex)
                return
            chained.catch(f.try_fail).then(f.try_resolve)

        def backprop_cancel(_):
            if chained is not None and chained.is_pending():
                chained.request_cancel()
            elif self.is_pending():
                self.request_cancel()

        self.then(on_success_start_next)
        self.catch(f.try_fail)
        f.on_cancel_requested(backprop_cancel)
        return f

    @classmethod
    def all(cls, futures):
        """Returns future resolved with the list of values of all provided
        futures, in the order of the original sequence.

        The first failure fails the returned future; later settlements are
        ignored. Empty sequence gives an already resolved future. Cancellation
        requested on the returned future goes to every pending input.

        Args:
            futures: iterable of futures to combine, consumed lazily while
            subscribing.
        """
        f = cls._new()
        inputs = []
        results = []
        resolved = 0
        finished_iterating = False

        def on_success(i, value):
            nonlocal resolved
            results[i] = value
            resolved += 1
            if finished_iterating and resolved == len(inputs):
                f.try_resolve(results)

        for fi in futures:
            fi = cls.convert(fi)
            inputs.append(fi)
            results.append(None)
            fi.then(functools.partial(on_success, len(inputs) - 1))
            fi.catch(f.try_fail)

        # total count is only known once iteration ends
        finished_iterating = True
        if resolved == len(inputs):
            f.try_resolve(results)

        f.on_cancel_requested(functools.partial(_cancel_pending, inputs))
        return f

    @classmethod
    def any(cls, futures):
        """Returns future which will be set from the first provided future to
        settle, both successfully or with failure.

        Empty sequence gives an already resolved future. Cancellation
        requested on the returned future goes to every pending input.

        Args:
            futures: sequence of futures to combine.
        """
        futures = [cls.convert(fi) for fi in futures]
        if not futures:
            return cls.resolved()

        f = cls._new()
        settled = False

        def on_success(value):
            nonlocal settled
            if not settled:
                settled = True
                f.try_resolve(value)

        def on_failure(ex):
            nonlocal settled
            if not settled:
                settled = True
                f.try_fail(ex)

        for fi in futures:
            fi.then(on_success)
            fi.catch(on_failure)

        f.on_cancel_requested(functools.partial(_cancel_pending, futures))
        return f

    @classmethod
    def sequence(cls, factories):
        """Returns future representing futures started one after another.

        Each factory is called without arguments to start the next step only
        after the previous step resolved. The first failure fails the returned
        future and no further factories are called. The returned future
        resolves with the list of produced futures.

        Cancellation requested on the returned future goes to the currently
        active step only.

        Args:
            factories: sequence of functions returning futures.
        """
        factories = list(factories)
        f = cls._new()
        produced = []
        index = 0

        def run_steps():
            # steps resolved synchronously are consumed in a loop, handlers
            # are attached only to a step that is still pending
            nonlocal index
            while f.is_pending():
                if index == len(factories):
                    f.resolve(list(produced))
                    return
                try:
                    step = cls.convert(factories[index]())
                except Exception as ex:
                    f.try_fail(ex)
                    return
                produced.append(step)
                if not step.is_resolved():
                    step.then(on_step_resolved)
                    step.catch(f.try_fail)
                    return
                index += 1

        def on_step_resolved(_):
            nonlocal index
            index += 1
            run_steps()

        def backprop_cancel(_):
            if index < len(produced) and produced[index].is_pending():
                produced[index].request_cancel()

        f.on_cancel_requested(backprop_cancel)
        run_steps()
        return f

    @classmethod
    def sequence_fold(cls, initial, steps):
        """Returns future of a value threaded through steps one after another.

        Each step is a function accepting the value the previous step resolved
        with (``initial`` for the first one) and returning a future. The
        returned future resolves with the value of the last step. Empty
        sequence gives a future resolved with ``initial``.

        Args:
            initial: value passed to the first step.
            steps: sequence of functions accepting value and returning future.
        """
        steps = list(steps)
        f = cls._new()
        index = 0
        current = None

        def run_steps(value):
            nonlocal index, current
            while f.is_pending():
                if index == len(steps):
                    f.resolve(value)
                    return
                try:
                    step = cls.convert(steps[index](value))
                except Exception as ex:
                    f.try_fail(ex)
                    return
                current = step
                if not step.is_resolved():
                    step.then(on_step_resolved)
                    step.catch(f.try_fail)
                    return
                index += 1
                value = step.value

        def on_step_resolved(value):
            nonlocal index
            index += 1
            run_steps(value)

        def backprop_cancel(_):
            if current is not None and current.is_pending():
                current.request_cancel()

        f.on_cancel_requested(backprop_cancel)
        run_steps(initial)
        return f

    @classmethod
    def aggregate(cls, source, fun, initial=_MISSING, result_selector=None):
        """Returns future of an asynchronous left fold over source items.

        Args:
            source: sequence of items.
            fun: function accepting accumulated value and next item and
            returning future of new accumulated value.
            initial: seed value; first item of source is used when omitted.
            result_selector: optional function accepting final value and
            returning future chained after the fold.

        Raises:
            TypeError: if source is empty and no initial value is given.
        """
        items = list(source)
        if initial is _MISSING:
            if not items:
                raise TypeError("Future.aggregate() of empty sequence with no initial value")
            initial, items = items[0], items[1:]

        f = cls.sequence_fold(
            initial, [functools.partial(_fold_step, fun, item) for item in items])
        if result_selector is not None:
            f = f.chain(result_selector)
        return f

    @classmethod
    def reduce(cls, futures, fun, initial):
        """Returns future which will be set with reduced result of all provided
        futures. In case of any failure future will be failed with first
        exception to occur.

        Args:
            futures: sequence of futures to combine.
            fun: reduce-compatible function.
            initial: initial value for reduction.
        """
        return cls \
            .all(futures) \
            .map(lambda results: functools.reduce(fun, results, initial))

    @classmethod
    def _new(cls):
        return cls()

    @classmethod
    def convert(cls, future):
        """Makes sure that passed object is a future that can be composed with
        this future type, or raises TypeError indicating incompatibility.
        """
        if not isinstance(future, FutureCore):
            raise TypeError("{} is not compatible with {}"
                            .format(_typename(cls), _typename(type(future))))
        return future


def _fold_step(fun, item, accumulated):
    return fun(accumulated, item)


def _cancel_pending(futures, _):
    for fi in futures:
        if fi.is_pending():
            fi.request_cancel()


def _typename(cls):
    return cls.__module__ + '.' + cls.__name__
