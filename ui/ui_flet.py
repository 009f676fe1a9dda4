import threading


# Flet runs event handlers and our daemon workers on separate threads, and a
# page has no main-thread queue to post to. Every mutation of shared controls
# goes through this lock so two re-renders never interleave.
_ui_lock = threading.RLock()


def ui_call(page, fn) -> None:
    with _ui_lock:
        fn()


def safe_update(*controls) -> None:
    # Controls not yet mounted on the page raise on update(); skip them.
    for ctl in controls:
        try:
            ctl.update()
        except AssertionError:
            pass
        except Exception as exc:
            print(f"[ui] update failed for {type(ctl).__name__}: {exc}")
