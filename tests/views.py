from django.http import HttpResponse
from django.views import View


def home(request):
    return HttpResponse("home")


def article_detail(request, slug):
    return HttpResponse(slug)


class AboutView(View):
    def get(self, request):
        return HttpResponse("about")


class ContactView(View):
    def post(self, request):
        return HttpResponse("thanks")
