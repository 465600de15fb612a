"""
`Logger.io`: call tracing for use cases, adapters and controllers.

At DEBUG every decorated call logs its (masked) arguments and return value, tagged with the
call target and the start time of the outermost decorated call in the chain. An exception is
logged once, by the innermost decorated frame it passes through.
"""

from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from eventora.platform.config.core_setting import settings
from eventora.platform.exception.exceptions import CustomBaseError
from eventora.platform.logging.loguru_io_config import (
    ExtraField,
    call_depth_var,
    custom_logger,
)
from eventora.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_LOGGED_FLAG = '_eventora_logged'


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.extra: dict[str, Any] = {}
        self.depth = 2  # wrapper + enter/leave helper

    def _bound(self, extra_depth: int = 0) -> 'LoguruLogger':
        return self._custom_logger.bind(**self.extra).opt(depth=self.depth + extra_depth)

    def enter(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        if not settings.DEBUG:
            return
        self._bound().debug(
            f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
        )

    def leave(self, return_value: Any) -> Any:
        if settings.DEBUG:
            self._bound().debug(f'return: {self.mask_sensitive(return_value)}')
        return return_value

    def fail(self, e: Exception) -> None:
        if not getattr(e, _LOGGED_FLAG, False):
            setattr(e, _LOGGED_FLAG, True)
            # Expected failures carry their own message; anything else needs the traceback
            if isinstance(e, CustomBaseError):
                self._bound(1).error(f'{type(e).__name__}: {e}')
            else:
                self._bound(1).exception(f'{type(e).__name__}: {e}')
        if self.reraise:
            raise e

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            masked: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            masked = type(data)(self.mask_sensitive(item) for item in data)
        else:
            masked = mask_sensitive(data)
        return truncate_content(masked) if self.truncate_content else masked

    def _as_loguru_frame(self, wrapper: Callable[..., Any]) -> Callable[..., Any]:
        # Loguru skips frames from its own file when resolving {file}/{function}
        loguru_file = cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        wrapper.__code__ = wrapper.__code__.replace(co_filename=loguru_file)  # type: ignore
        return wrapper

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def traced_coroutine(*args: Any, **kwargs: Any) -> Any:
                try:
                    self.enter(args, kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    return self.leave(await func(*args, **kwargs))
                except Exception as e:
                    self.fail(e)
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._as_loguru_frame(traced_coroutine))

        @wraps(func)
        def traced_call(*args: Any, **kwargs: Any) -> Any:
            try:
                self.enter(args, kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                return self.leave(func(*args, **kwargs))
            except Exception as e:
                self.fail(e)
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._as_loguru_frame(traced_call))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
