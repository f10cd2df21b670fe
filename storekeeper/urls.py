from django.urls import path

from storekeeper.views import CallableView

app_name = 'storekeeper'

urlpatterns = [
    path('<str:name>/', CallableView.as_view(), name='callable'),
]
