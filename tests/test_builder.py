"""
Form builders and the form registry.
"""

import pytest

from nexaform.core.container import ServiceContainer, ServiceNotFoundError
from nexaform.core.middleware import run_handler
from nexaform.core.response import HTMLResponse, RedirectResponse, ShortCircuit
from nexaform.exceptions import FormConfigurationError, FormNotFoundError
from nexaform.forms.builder import FormBuilder, FormRegistry


class Subscribers:
    def __init__(self, existing=()):
        self.emails = list(existing)

    def exists(self, email):
        return email in self.emails

    def add(self, email):
        self.emails.append(email)


class NewsletterForm(FormBuilder):
    form_id = "newsletter"

    def init(self):
        self.calls = ["init"]

    def create(self):
        self.calls.append("create")
        self.form.fields.add_input("email", "E-mail").add_submit_button("Join")

    def validation(self):
        self.calls.append("validation")
        return {"email": ["required", "isEmail"]}

    def on_submit(self):
        self.calls.append("on_submit")
        subscribers = self.service("subscribers")
        email = self.form.get("email")

        if subscribers.exists(email):
            self.add_error("email", "Already subscribed.")
            return

        subscribers.add(email)
        self.form.redirect("/thanks")


@pytest.fixture
def container():
    return ServiceContainer().instance("subscribers", Subscribers(["old@example.com"]))


class TestFormBuilder:
    def test_first_visit_renders_empty_form(self, make_request, container):
        builder = NewsletterForm(make_request(), container=container)

        html = builder.generate()

        assert builder.calls == ["init", "create", "validation"]
        assert html.startswith('<form action="/form" method="POST" id="newsletter">')
        assert 'name="formId"' in html
        assert 'class="validation"' not in html

    def test_accepted_submission_redirects(self, make_request, container):
        request = make_request(post={"formId": "newsletter", "email": "new@example.com"})
        builder = NewsletterForm(request, container=container)

        with pytest.raises(ShortCircuit) as exc:
            builder.generate()

        assert builder.calls[-1] == "on_submit"
        assert isinstance(exc.value.response, RedirectResponse)
        assert container.resolve("subscribers").exists("new@example.com")

    def test_error_added_on_submit_is_rendered(self, make_request, container):
        request = make_request(post={"formId": "newsletter", "email": "old@example.com"})

        html = NewsletterForm(request, container=container).generate()

        assert '<div class="validation">Already subscribed.</div>' in html
        assert request.state["form_errors"]["newsletter"] == {"email": "Already subscribed."}

    def test_invalid_submission_skips_on_submit(self, make_request, container):
        request = make_request(post={"formId": "newsletter", "email": "nope"})
        builder = NewsletterForm(request, container=container)

        html = builder.generate()

        assert "on_submit" not in builder.calls
        assert "The provided email address is invalid." in html

    def test_other_form_submission_is_ignored(self, make_request, container):
        request = make_request(post={"formId": "login", "email": "new@example.com"})
        builder = NewsletterForm(request, container=container)

        builder.generate()

        assert "on_submit" not in builder.calls
        assert not container.resolve("subscribers").exists("new@example.com")

    def test_through_run_handler(self, make_request, container):
        request = make_request(post={"formId": "newsletter", "email": "new@example.com"})

        def handler(req):
            return HTMLResponse(NewsletterForm(req, container=container).generate())

        response = run_handler(handler, request)

        assert response.status_code == 302
        assert response.headers["Location"] == "/thanks"

    def test_missing_service(self, make_request):
        request = make_request(post={"formId": "newsletter", "email": "new@example.com"})

        with pytest.raises(ServiceNotFoundError):
            NewsletterForm(request).generate()

    def test_class_settings_reach_the_form(self, make_request):
        class SearchForm(NewsletterForm):
            form_id = "search"
            method = "GET"
            action = "/search"
            theme = "bootstrap"
            ajax = True

        form = SearchForm(make_request()).form

        assert form.method.value == "GET"
        assert form.form_attributes() == {
            "action": "/search",
            "method": "GET",
            "id": "search",
            "class": "ajax-form",
        }

    def test_abstract_builder_cannot_be_created(self, make_request):
        with pytest.raises(TypeError):
            FormBuilder(make_request())

    def test_log_uses_builder_name(self, make_request, memory_logger, memory_handler):
        builder = NewsletterForm(make_request())
        builder.logger = memory_logger

        builder.log("Subscribed", email="x")

        record = memory_handler.records[-1]
        assert record.message == "Subscribed"
        assert record.context == {"form": "NewsletterForm", "email": "x"}


class TestFormRegistry:
    def test_register_directly(self):
        registry = FormRegistry()
        registry.register("newsletter", NewsletterForm)

        assert registry.get("newsletter") is NewsletterForm
        assert "newsletter" in registry
        assert len(registry) == 1
        assert registry.names() == ["newsletter"]

    def test_register_as_decorator(self):
        registry = FormRegistry()

        @registry.register("other")
        class OtherForm(NewsletterForm):
            pass

        assert registry.get("other") is OtherForm

    def test_unknown_name(self, make_request):
        registry = FormRegistry()

        assert registry.get("missing") is None
        with pytest.raises(FormNotFoundError) as exc:
            registry.generate("missing", make_request())

        assert exc.value.name == "missing"

    def test_generate(self, make_request, container):
        registry = FormRegistry()
        registry.register("newsletter", NewsletterForm)

        html = registry.generate("newsletter", make_request(), container=container)

        assert 'id="newsletter"' in html

    def test_name_taken(self):
        registry = FormRegistry()
        registry.register("newsletter", NewsletterForm)
        registry.register("newsletter", NewsletterForm)

        class OtherForm(NewsletterForm):
            pass

        with pytest.raises(FormConfigurationError):
            registry.register("newsletter", OtherForm)

    @pytest.mark.parametrize("builder", [object, dict, "NewsletterForm"])
    def test_not_a_builder(self, builder):
        with pytest.raises(FormConfigurationError):
            FormRegistry().register("bad", builder)
